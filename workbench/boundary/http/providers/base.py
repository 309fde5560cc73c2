"""
Transcript provider interface.

Dependencies: httpx
System role: Provider abstraction for the transcript pipeline
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta

import httpx

from workbench.boundary.db.base import utcnow
from workbench.boundary.db.models import TranscriptsConfigurationModel
from workbench.boundary.http.oauth_client import OAuthTokenClient
from workbench.core.exceptions import ProviderError
from workbench.models.transcript import TranscriptContent


class BaseTranscriptsProvider(ABC):
    """Lists and fetches meeting transcripts on behalf of a user."""

    name: str = ""

    def __init__(
        self,
        api_url: str,
        oauth_client: OAuthTokenClient,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
        lookback_days: int = 7,
    ) -> None:
        """
        Initialize provider.

        Args:
            api_url: Provider API base URL
            oauth_client: Resolves the user's access token
            http_client: Optional shared httpx client
            timeout: Request timeout when the provider creates its own client
            lookback_days: Only transcripts created within this window are listed
        """
        self._api_url = api_url.rstrip("/")
        self._oauth = oauth_client
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)
        self._lookback_days = lookback_days

    async def close(self) -> None:
        """Close the underlying httpx client if this instance created it."""
        if self._owns_client:
            await self._http.aclose()

    def lookback_start(self, now: datetime | None = None) -> datetime:
        """Start of the discovery window."""
        return (now or utcnow()) - timedelta(days=self._lookback_days)

    async def _auth_headers(self, configuration: TranscriptsConfigurationModel) -> dict[str, str]:
        token = await self._oauth.get_access_token(self.name, configuration.connection_id)
        return {"Authorization": f"Bearer {token}"}

    async def _call(self, method: str, path: str, headers: dict[str, str], **kwargs) -> httpx.Response:
        url = f"{self._api_url}/{path.lstrip('/')}"
        try:
            response = await self._http.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            raise ProviderError(self.name, f"{method} {path} failed: {e!r}") from e
        if not response.is_success:
            raise ProviderError(
                self.name,
                f"{method} {path} returned HTTP {response.status_code}",
                details={"body": response.text[:500]},
            )
        return response

    @abstractmethod
    async def list_transcript_ids(self, configuration: TranscriptsConfigurationModel) -> list[str]:
        """List candidate transcript ids created within the lookback window."""

    @abstractmethod
    async def fetch_transcript(
        self,
        configuration: TranscriptsConfigurationModel,
        file_id: str,
    ) -> TranscriptContent:
        """Fetch one transcript's title and plain-text content."""
