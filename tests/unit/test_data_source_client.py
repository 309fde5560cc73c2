"""
Test suite for DataSourceClient.

Tests upsert retry behavior (attempt count, quadratic delays, aggregated
errors), success/error counters and single-attempt deletes. HTTP traffic
goes through httpx.MockTransport; sleeps are recorded instead of awaited.

System role: Verification of document sync client
"""

import json

import httpx
import pytest
from prometheus_client import REGISTRY

from workbench.boundary.http.data_source_client import DataSourceClient, quadratic_backoff
from workbench.core.exceptions import DataSourceError, UpsertRetriesExhaustedError, ValidationError
from workbench.models.data_source import DataSourceConfig


class RecordingSleep:
    """Async sleep stand-in that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def make_client(handler, sleep=None) -> DataSourceClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return DataSourceClient(
        "https://front.test/",
        http_client=http_client,
        sleep=sleep or RecordingSleep(),
    )


@pytest.fixture
def config() -> DataSourceConfig:
    """Provide a data source config with a unique workspace id."""
    return DataSourceConfig(
        workspace_id="w-retry",
        workspace_api_key="sk-test",
        data_source_name="managed-notion",
    )


def counter_value(name: str, config: DataSourceConfig) -> float:
    value = REGISTRY.get_sample_value(
        f"{name}_total",
        {"data_source_name": config.data_source_name, "workspace_id": config.workspace_id},
    )
    return value or 0.0


class TestDataSourceClientInit:
    """Test suite for client construction."""

    def test_missing_front_api_should_raise(self) -> None:
        with pytest.raises(ValueError, match="front_api not set"):
            DataSourceClient("")

    def test_document_url_should_escape_data_source_name(self, config: DataSourceConfig) -> None:
        client = make_client(lambda request: httpx.Response(200))
        config.data_source_name = "my source/1"

        url = client.document_url(config, "doc-1")

        assert url == (
            "https://front.test/api/v1/w/w-retry/data_sources/my%20source%2F1/documents/doc-1"
        )


class TestQuadraticBackoff:
    """Test suite for the backoff wait strategy."""

    def test_wait_should_grow_with_square_of_attempt(self) -> None:
        class State:
            attempt_number = 3

        assert quadratic_backoff(500)(State()) == pytest.approx(4.5)


class TestUpsertDocument:
    """Test suite for DataSourceClient.upsert_document()."""

    @pytest.mark.asyncio
    async def test_retries_below_one_should_reject_without_request(
        self,
        config: DataSourceConfig,
    ) -> None:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200)

        client = make_client(handler)

        with pytest.raises(ValidationError):
            await client.upsert_document(config, "doc-1", "hello", retries=0)

        assert calls == []

    @pytest.mark.asyncio
    async def test_success_should_post_payload_once(self, config: DataSourceConfig) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"document": {}})

        sleep = RecordingSleep()
        client = make_client(handler, sleep)
        config.workspace_id = "w-success"
        before = counter_value("data_source_upserts_success", config)

        await client.upsert_document(
            config,
            "doc-1",
            "hello",
            url="https://notion.test/page",
            timestamp=1700000000000,
            tags=["title:Page"],
        )

        assert len(requests) == 1
        assert requests[0].method == "POST"
        assert requests[0].headers["Authorization"] == "Bearer sk-test"
        body = json.loads(requests[0].content)
        assert body == {
            "text": "hello",
            "source_url": "https://notion.test/page",
            "timestamp": 1700000000000,
            "tags": ["title:Page"],
        }
        assert sleep.delays == []
        assert counter_value("data_source_upserts_success", config) == before + 1

    @pytest.mark.asyncio
    async def test_all_attempts_failing_should_raise_aggregate(
        self,
        config: DataSourceConfig,
    ) -> None:
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(request)
            return httpx.Response(500, text=f"boom {len(attempts)}")

        sleep = RecordingSleep()
        client = make_client(handler, sleep)
        config.workspace_id = "w-exhausted"
        before = counter_value("data_source_upserts_error", config)

        with pytest.raises(UpsertRetriesExhaustedError) as exc_info:
            await client.upsert_document(config, "doc-1", "hello", retries=3, base_delay_ms=100)

        assert len(attempts) == 3
        assert len(exc_info.value.errors) == 3
        assert all(isinstance(e, DataSourceError) for e in exc_info.value.errors)
        assert all(e.status_code == 500 for e in exc_info.value.errors)
        assert str(exc_info.value).count("HTTP 500") == 3
        # the final failed attempt backs off as well
        assert sleep.delays == pytest.approx([0.1, 0.4, 0.9])
        assert counter_value("data_source_upserts_error", config) == before + 3

    @pytest.mark.asyncio
    async def test_transient_failure_should_recover(self, config: DataSourceConfig) -> None:
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(request)
            if len(attempts) < 3:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200)

        sleep = RecordingSleep()
        client = make_client(handler, sleep)

        await client.upsert_document(config, "doc-1", "hello", retries=5, base_delay_ms=500)

        assert len(attempts) == 3
        assert sleep.delays == pytest.approx([0.5, 2.0])


class TestDeleteDocument:
    """Test suite for DataSourceClient.delete_document()."""

    @pytest.mark.asyncio
    async def test_delete_should_send_single_request(self, config: DataSourceConfig) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200)

        client = make_client(handler)

        await client.delete_document(config, "doc-1")

        assert [r.method for r in requests] == ["DELETE"]
        assert requests[0].url.path.endswith("/documents/doc-1")

    @pytest.mark.asyncio
    async def test_delete_failure_should_not_retry(self, config: DataSourceConfig) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(503)

        client = make_client(handler)

        with pytest.raises(DataSourceError) as exc_info:
            await client.delete_document(config, "doc-1")

        assert len(requests) == 1
        assert exc_info.value.status_code == 503


class TestFromSettings:
    """Test suite for DataSourceClient.from_settings()."""

    def test_missing_front_api_should_raise(self) -> None:
        from workbench.configs.data_sources import DataSourceSettings

        with pytest.raises(ValueError, match="front_api not set"):
            DataSourceClient.from_settings(DataSourceSettings(front_api=None))

    @pytest.mark.asyncio
    async def test_settings_defaults_should_drive_retries(self, config: DataSourceConfig) -> None:
        from workbench.configs.data_sources import DataSourceSettings

        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(request)
            return httpx.Response(502)

        client = DataSourceClient.from_settings(
            DataSourceSettings(front_api="https://front.test", upsert_retries=2, upsert_base_delay_ms=10),
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )
        sleep = RecordingSleep()
        client._sleep = sleep

        with pytest.raises(UpsertRetriesExhaustedError):
            await client.upsert_document(config, "doc-1", "hello")

        assert len(attempts) == 2
        assert sleep.delays == pytest.approx([0.01, 0.04])
