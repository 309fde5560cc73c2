"""
Test suite for HttpClients wiring.

Each outbound client sends its own configured timeout with every request,
even though all of them share one httpx client.

System role: Verification of outbound HTTP client assembly
"""

import httpx
import pytest

from workbench.boundary.http.clients import HttpClients
from workbench.configs import Settings
from workbench.configs.assistant_api import AssistantApiSettings
from workbench.configs.mail import EmailSettings
from workbench.configs.oauth import OAuthSettings
from workbench.models.transcript import EmailAddress, EmailMessage


@pytest.fixture
def settings() -> Settings:
    return Settings(
        assistant_api=AssistantApiSettings(base_url="https://front.test", request_timeout=45.0),
        email=EmailSettings(api_url="https://mail.test/v3/mail/send", request_timeout=7.0),
        oauth=OAuthSettings(base_url="https://oauth.test", gong_provider_key="gong-key", request_timeout=9.0),
    )


def read_timeout(request: httpx.Request) -> float:
    return request.extensions["timeout"]["read"]


class TestRequestTimeouts:
    """Test suite for per-client request timeouts."""

    @pytest.mark.asyncio
    async def test_assistant_requests_should_use_assistant_timeout(self, settings: Settings) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(404)

        async with HttpClients(
            settings, http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler))
        ) as clients:
            assert await clients.assistant.get_conversation("w-1", "conv-1") is None

        assert read_timeout(requests[0]) == 45.0

    @pytest.mark.asyncio
    async def test_email_requests_should_use_email_timeout(self, settings: Settings) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(202)

        async with HttpClients(
            settings, http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler))
        ) as clients:
            await clients.email.send_email(
                "ada@acme.test",
                EmailMessage(
                    sender=EmailAddress(name="Workbench team", email="team@app.test"),
                    subject="Meeting summary - Weekly",
                    html="<p>Hi</p>",
                ),
            )

        assert read_timeout(requests[0]) == 7.0

    @pytest.mark.asyncio
    async def test_oauth_requests_should_use_oauth_timeout(self, settings: Settings) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"credentials": {"access_token": "tok"}})

        async with HttpClients(
            settings, http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler))
        ) as clients:
            assert await clients.oauth.get_access_token("gong", "conn-1") == "tok"

        assert read_timeout(requests[0]) == 9.0
