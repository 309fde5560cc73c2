"""
OAuth connection service client.

Transcript providers are called with the user's own OAuth token, stored and
refreshed by the connection service under a connection id.

Dependencies: httpx
System role: Provider credential resolution
"""

import httpx

from workbench.core.exceptions import ProviderError


class OAuthTokenClient:
    """Resolves provider access tokens from connection ids."""

    def __init__(
        self,
        base_url: str,
        secret_key: str,
        provider_keys: dict[str, str],
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        """
        Initialize OAuth token client.

        Args:
            base_url: Connection service URL
            secret_key: Connection service secret key
            provider_keys: Provider name -> provider config key
            http_client: Optional shared httpx client
            timeout: Per-request timeout in seconds
        """
        self._base_url = base_url.rstrip("/")
        self._secret_key = secret_key
        self._provider_keys = provider_keys
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)
        self._timeout = timeout

    async def close(self) -> None:
        """Close the underlying httpx client if this instance created it."""
        if self._owns_client:
            await self._http.aclose()

    async def get_access_token(self, provider: str, connection_id: str) -> str:
        """
        Fetch a fresh access token for a connection.

        Args:
            provider: Provider name (google_drive, gong)
            connection_id: Connection id stored on the transcript configuration

        Returns:
            str: Access token

        Raises:
            ProviderError: If the connection cannot be read
        """
        provider_key = self._provider_keys.get(provider)
        if provider_key is None:
            raise ProviderError(provider, f"No OAuth provider key configured for {provider}")

        try:
            response = await self._http.get(
                f"{self._base_url}/connection/{connection_id}",
                params={"provider_config_key": provider_key},
                headers={"Authorization": f"Bearer {self._secret_key}"},
                timeout=self._timeout,
            )
        except httpx.HTTPError as e:
            raise ProviderError(provider, f"Could not reach OAuth service: {e!r}") from e

        if not response.is_success:
            raise ProviderError(
                provider,
                f"Could not read OAuth connection: HTTP {response.status_code}",
                details={"connection_id": connection_id},
            )

        access_token = response.json().get("credentials", {}).get("access_token")
        if not access_token:
            raise ProviderError(
                provider,
                "OAuth connection has no access token",
                details={"connection_id": connection_id},
            )
        return access_token
