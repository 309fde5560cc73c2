"""
Transactional email client.

Sends structured ``{from, subject, html}`` messages through the SendGrid v3
mail API.

Dependencies: httpx
System role: User notifications
"""

import logging

import httpx

from workbench.core.exceptions import EmailDeliveryError
from workbench.models.transcript import EmailMessage

logger = logging.getLogger(__name__)


class EmailClient:
    """Mail API client."""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._api_url = api_url
        self._api_key = api_key
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)
        self._timeout = timeout

    async def close(self) -> None:
        """Close the underlying httpx client if this instance created it."""
        if self._owns_client:
            await self._http.aclose()

    async def send_email(self, to: str, message: EmailMessage) -> None:
        """
        Send one HTML email.

        Args:
            to: Recipient address
            message: Sender, subject and HTML body

        Raises:
            EmailDeliveryError: On transport error or rejected message
        """
        body = {
            "personalizations": [{"to": [{"email": to}]}],
            "from": {"email": message.sender.email, "name": message.sender.name},
            "subject": message.subject,
            "content": [{"type": "text/html", "value": message.html}],
        }
        try:
            response = await self._http.post(
                self._api_url,
                json=body,
                headers={"Authorization": f"Bearer {self._api_key}"},
                timeout=self._timeout,
            )
        except httpx.HTTPError as e:
            raise EmailDeliveryError(f"Could not reach mail API: {e!r}") from e

        if not response.is_success:
            raise EmailDeliveryError(
                f"Mail API rejected message: HTTP {response.status_code}",
                {"subject": message.subject},
            )
        logger.info("Email sent", extra={"subject": message.subject})
