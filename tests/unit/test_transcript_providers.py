"""
Test suite for transcript providers and OAuth token resolution.

System role: Verification of transcript provider adapters
"""

import json
import uuid
from unittest.mock import AsyncMock

import httpx
import pytest

from workbench.boundary.db.models import TranscriptsConfigurationModel, TranscriptsProvider
from workbench.boundary.http.oauth_client import OAuthTokenClient
from workbench.boundary.http.providers import GongTranscriptsProvider, GoogleDriveTranscriptsProvider
from workbench.boundary.http.providers.gong import format_monologues
from workbench.core.exceptions import ProviderError


def make_configuration(provider: TranscriptsProvider) -> TranscriptsConfigurationModel:
    return TranscriptsConfigurationModel(
        id=uuid.uuid4(),
        user_id=uuid.uuid4(),
        workspace_id=uuid.uuid4(),
        provider=provider,
        connection_id="conn-1",
        agent_configuration_id="agent-1",
        is_active=True,
    )


@pytest.fixture
def oauth_client() -> OAuthTokenClient:
    client = AsyncMock(spec=OAuthTokenClient)
    client.get_access_token.return_value = "token-123"
    return client


class TestOAuthTokenClient:
    """Test suite for OAuthTokenClient.get_access_token()."""

    @pytest.mark.asyncio
    async def test_should_return_access_token(self) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"credentials": {"access_token": "abc"}})

        client = OAuthTokenClient(
            "https://oauth.test",
            "secret",
            {"gong": "gong-key"},
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )

        assert await client.get_access_token("gong", "conn-1") == "abc"
        assert requests[0].url.path == "/connection/conn-1"
        assert requests[0].url.params["provider_config_key"] == "gong-key"

    @pytest.mark.asyncio
    async def test_unknown_provider_should_raise(self) -> None:
        client = OAuthTokenClient("https://oauth.test", "secret", {})

        with pytest.raises(ProviderError):
            await client.get_access_token("zoom", "conn-1")

        await client.close()


class TestGoogleDriveProvider:
    """Test suite for GoogleDriveTranscriptsProvider."""

    @pytest.mark.asyncio
    async def test_list_should_follow_page_tokens(self, oauth_client) -> None:
        pages = {
            None: {"files": [{"id": "f-1"}, {"id": "f-2"}], "nextPageToken": "p2"},
            "p2": {"files": [{"id": "f-3"}]},
        }
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=pages[request.url.params.get("pageToken")])

        provider = GoogleDriveTranscriptsProvider(
            "https://drive.test/drive/v3",
            oauth_client,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )

        file_ids = await provider.list_transcript_ids(make_configuration(TranscriptsProvider.GOOGLE_DRIVE))

        assert file_ids == ["f-1", "f-2", "f-3"]
        assert requests[0].headers["Authorization"] == "Bearer token-123"
        assert "- Transcript" in requests[0].url.params["q"]
        oauth_client.get_access_token.assert_awaited_with("google_drive", "conn-1")

    @pytest.mark.asyncio
    async def test_fetch_should_export_plain_text(self, oauth_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/export"):
                assert request.url.params["mimeType"] == "text/plain"
                return httpx.Response(200, text="Ada: hello\nBob: hi")
            return httpx.Response(200, json={"name": "Weekly - Transcript"})

        provider = GoogleDriveTranscriptsProvider(
            "https://drive.test/drive/v3",
            oauth_client,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )

        transcript = await provider.fetch_transcript(
            make_configuration(TranscriptsProvider.GOOGLE_DRIVE), "f-1"
        )

        assert transcript.title == "Weekly - Transcript"
        assert transcript.content == "Ada: hello\nBob: hi"

    @pytest.mark.asyncio
    async def test_error_status_should_raise_provider_error(self, oauth_client) -> None:
        provider = GoogleDriveTranscriptsProvider(
            "https://drive.test/drive/v3",
            oauth_client,
            http_client=httpx.AsyncClient(
                transport=httpx.MockTransport(lambda request: httpx.Response(403))
            ),
        )

        with pytest.raises(ProviderError):
            await provider.list_transcript_ids(make_configuration(TranscriptsProvider.GOOGLE_DRIVE))


class TestGongProvider:
    """Test suite for GongTranscriptsProvider."""

    @pytest.mark.asyncio
    async def test_fetch_should_prefix_sentences_with_speaker(self, oauth_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content)
            assert body["filter"] == {"callIds": ["call-1"]}
            if request.url.path.endswith("/calls/extensive"):
                return httpx.Response(
                    200,
                    json={
                        "calls": [
                            {
                                "metaData": {"title": "Discovery call"},
                                "parties": [
                                    {"speakerId": "s1", "name": "Ada"},
                                    {"speakerId": "s2", "name": "Bob"},
                                ],
                            }
                        ]
                    },
                )
            return httpx.Response(
                200,
                json={
                    "callTranscripts": [
                        {
                            "callId": "call-1",
                            "transcript": [
                                {"speakerId": "s1", "sentences": [{"text": "Hello."}, {"text": "Welcome."}]},
                                {"speakerId": "s2", "sentences": [{"text": "Thanks."}]},
                            ],
                        }
                    ]
                },
            )

        provider = GongTranscriptsProvider(
            "https://gong.test/v2",
            oauth_client,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )

        transcript = await provider.fetch_transcript(make_configuration(TranscriptsProvider.GONG), "call-1")

        assert transcript.title == "Discovery call"
        assert transcript.content == "Ada: Hello. Welcome.\nBob: Thanks."

    @pytest.mark.asyncio
    async def test_list_should_follow_cursor(self, oauth_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.params.get("cursor") == "c2":
                return httpx.Response(200, json={"calls": [{"id": 3}], "records": {}})
            return httpx.Response(
                200,
                json={"calls": [{"id": 1}, {"id": 2}], "records": {"cursor": "c2"}},
            )

        provider = GongTranscriptsProvider(
            "https://gong.test/v2",
            oauth_client,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )

        call_ids = await provider.list_transcript_ids(make_configuration(TranscriptsProvider.GONG))

        assert call_ids == ["1", "2", "3"]

    def test_unknown_speaker_should_be_labelled(self) -> None:
        content = format_monologues([{"speakerId": "x", "sentences": [{"text": "Hi"}]}], {})

        assert content == "Unknown speaker: Hi"
