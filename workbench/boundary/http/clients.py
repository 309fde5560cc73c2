"""
Outbound HTTP client container.

Builds every httpx-based collaborator of the transcript pipeline from
settings, sharing one httpx.AsyncClient. httpx clients are bound to the
event loop they were first used on, so each worker task run builds its own
container while the API keeps one for the process lifetime.

Dependencies: httpx, workbench.configs
System role: Outbound client wiring
"""

import httpx

from workbench.boundary.db.models import TranscriptsProvider
from workbench.boundary.http.assistant_client import AssistantApiClient
from workbench.boundary.http.email_client import EmailClient
from workbench.boundary.http.oauth_client import OAuthTokenClient
from workbench.boundary.http.providers import (
    BaseTranscriptsProvider,
    GongTranscriptsProvider,
    GoogleDriveTranscriptsProvider,
)
from workbench.configs import Settings


class HttpClients:
    """Transcript pipeline clients sharing one connection pool."""

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None) -> None:
        self._http = http_client or httpx.AsyncClient(timeout=settings.transcripts.request_timeout)
        self._owns_client = http_client is None

        self.oauth = OAuthTokenClient(
            base_url=settings.oauth.base_url,
            secret_key=settings.oauth.secret_key,
            provider_keys={
                TranscriptsProvider.GOOGLE_DRIVE.value: settings.oauth.google_drive_provider_key,
                TranscriptsProvider.GONG.value: settings.oauth.gong_provider_key,
            },
            http_client=self._http,
            timeout=settings.oauth.request_timeout,
        )
        self.providers: dict[TranscriptsProvider, BaseTranscriptsProvider] = {
            TranscriptsProvider.GOOGLE_DRIVE: GoogleDriveTranscriptsProvider(
                api_url=settings.transcripts.google_drive_api_url,
                oauth_client=self.oauth,
                http_client=self._http,
                lookback_days=settings.transcripts.lookback_days,
            ),
            TranscriptsProvider.GONG: GongTranscriptsProvider(
                api_url=settings.transcripts.gong_api_url,
                oauth_client=self.oauth,
                http_client=self._http,
                lookback_days=settings.transcripts.lookback_days,
            ),
        }
        self.assistant = AssistantApiClient(
            base_url=settings.assistant_api.base_url,
            api_key=settings.assistant_api.api_key,
            http_client=self._http,
            timeout=settings.assistant_api.request_timeout,
            poll_interval=settings.assistant_api.poll_interval,
            poll_max_attempts=settings.assistant_api.poll_max_attempts,
        )
        self.email = EmailClient(
            api_url=settings.email.api_url,
            api_key=settings.email.api_key,
            http_client=self._http,
            timeout=settings.email.request_timeout,
        )

    async def aclose(self) -> None:
        """Close the shared httpx client if this container created it."""
        if self._owns_client:
            await self._http.aclose()

    async def __aenter__(self) -> "HttpClients":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
