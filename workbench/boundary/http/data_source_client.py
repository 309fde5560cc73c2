"""
Data source index client.

Upserts and deletes text documents in a workspace data source. Upserts are
retried with quadratic backoff; deletes are attempted once.

Dependencies: httpx, tenacity, prometheus_client
System role: Document sync from connectors to the managed index
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable
from urllib.parse import quote

import httpx
from tenacity import AsyncRetrying, RetryCallState, retry_if_exception_type, stop_after_attempt

from workbench.configs.data_sources import DataSourceSettings
from workbench.core.exceptions import DataSourceError, UpsertRetriesExhaustedError, ValidationError
from workbench.models.data_source import DataSourceConfig, UpsertDocumentPayload
from workbench.observability.log_utils import log_with_context
from workbench.observability.metrics import record_upsert

logger = logging.getLogger(__name__)

DEFAULT_UPSERT_RETRIES = 10
DEFAULT_BASE_DELAY_MS = 500


def quadratic_backoff(base_delay_ms: int) -> Callable[[RetryCallState], float]:
    """
    Build a tenacity wait strategy sleeping ``base * attempt**2`` ms.

    ``attempt_number`` is 1-based, so the i-th failure (0-based) waits
    ``base_delay_ms * (i + 1) ** 2`` milliseconds.
    """

    def wait(retry_state: RetryCallState) -> float:
        return base_delay_ms * retry_state.attempt_number ** 2 / 1000

    return wait


class DataSourceClient:
    """Client for the document endpoints of the data source API."""

    def __init__(
        self,
        front_api: str | None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        retries: int = DEFAULT_UPSERT_RETRIES,
        base_delay_ms: int = DEFAULT_BASE_DELAY_MS,
    ) -> None:
        """
        Initialize data source client.

        Args:
            front_api: Base URL of the index API
            http_client: Optional shared httpx client (closed by its owner)
            timeout: Request timeout in seconds when the client creates its own
            sleep: Coroutine used to wait between upsert attempts
            retries: Default maximum number of upsert attempts
            base_delay_ms: Default base delay of the upsert backoff

        Raises:
            ValueError: If front_api is empty
        """
        if not front_api:
            raise ValueError("front_api not set")
        self._front_api = front_api.rstrip("/")
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)
        self._sleep = sleep
        self._retries = retries
        self._base_delay_ms = base_delay_ms

    @classmethod
    def from_settings(
        cls,
        settings: DataSourceSettings,
        http_client: httpx.AsyncClient | None = None,
    ) -> "DataSourceClient":
        """
        Build a client from DATA_SOURCE_* settings.

        Raises:
            ValueError: If front_api is not configured
        """
        return cls(
            settings.front_api,
            http_client=http_client,
            timeout=settings.request_timeout,
            retries=settings.upsert_retries,
            base_delay_ms=settings.upsert_base_delay_ms,
        )

    async def __aenter__(self) -> "DataSourceClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying httpx client if this instance created it."""
        if self._owns_client:
            await self._http.aclose()

    def document_url(self, config: DataSourceConfig, document_id: str) -> str:
        """Endpoint of one document of a data source."""
        url_safe_name = quote(config.data_source_name, safe="")
        return (
            f"{self._front_api}/api/v1/w/{config.workspace_id}"
            f"/data_sources/{url_safe_name}/documents/{document_id}"
        )

    @staticmethod
    def _headers(config: DataSourceConfig) -> dict[str, str]:
        return {"Authorization": f"Bearer {config.workspace_api_key}"}

    async def upsert_document(
        self,
        config: DataSourceConfig,
        document_id: str,
        text: str,
        url: str | None = None,
        timestamp: int | None = None,
        tags: list[str] | None = None,
        retries: int | None = None,
        base_delay_ms: int | None = None,
        logger_args: dict[str, Any] | None = None,
    ) -> None:
        """
        Upsert a document, retrying failed attempts with quadratic backoff.

        Args:
            config: Target data source
            document_id: Document id within the data source
            text: Document text
            url: Optional source URL
            timestamp: Optional document timestamp (ms since epoch)
            tags: Optional tags
            retries: Maximum number of attempts (must be >= 1), client default if None
            base_delay_ms: Base delay of the backoff, client default if None
            logger_args: Extra context attached to log records

        Raises:
            ValidationError: If retries < 1 (no request is made)
            UpsertRetriesExhaustedError: If every attempt failed
        """
        retries = self._retries if retries is None else retries
        base_delay_ms = self._base_delay_ms if base_delay_ms is None else base_delay_ms
        if retries < 1:
            raise ValidationError("retries must be >= 1", field="retries")

        payload = UpsertDocumentPayload(
            text=text,
            source_url=url,
            timestamp=timestamp,
            tags=tags,
        )
        context = {**(logger_args or {}), "document_id": document_id}
        errors: list[DataSourceError] = []

        def log_retry(retry_state: RetryCallState) -> None:
            log_with_context(
                logger,
                logging.WARNING,
                "Error upserting to data source. Retrying...",
                error=retry_state.outcome.exception(),
                attempt=retry_state.attempt_number,
                retries=retries,
                sleep_time=retry_state.upcoming_sleep,
                **context,
            )

        retrying = AsyncRetrying(
            stop=stop_after_attempt(retries),
            wait=quadratic_backoff(base_delay_ms),
            retry=retry_if_exception_type(DataSourceError),
            before_sleep=log_retry,
            sleep=self._sleep,
            reraise=True,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    try:
                        await self._upsert_once(config, document_id, payload, context)
                    except DataSourceError as e:
                        errors.append(e)
                        raise
        except DataSourceError as e:
            # the last failed attempt backs off too before giving up
            final_sleep = base_delay_ms * len(errors) ** 2 / 1000
            log_with_context(
                logger,
                logging.WARNING,
                "Error upserting to data source. Giving up after backoff.",
                error=e,
                attempt=len(errors),
                retries=retries,
                sleep_time=final_sleep,
                **context,
            )
            await self._sleep(final_sleep)
            raise UpsertRetriesExhaustedError(errors) from e

    async def _upsert_once(
        self,
        config: DataSourceConfig,
        document_id: str,
        payload: UpsertDocumentPayload,
        context: dict[str, Any],
    ) -> None:
        try:
            response = await self._http.post(
                self.document_url(config, document_id),
                json=payload.model_dump(),
                headers=self._headers(config),
            )
        except httpx.HTTPError as e:
            record_upsert(config.data_source_name, config.workspace_id, success=False)
            log_with_context(
                logger,
                logging.ERROR,
                "Error uploading document to data source.",
                error=repr(e),
                **context,
            )
            raise DataSourceError(
                f"Error uploading to data source: {e!r}",
                operation="upsert",
            ) from e

        if response.is_success:
            record_upsert(config.data_source_name, config.workspace_id, success=True)
            log_with_context(
                logger,
                logging.INFO,
                "Successfully uploaded document to data source.",
                **context,
            )
            return

        record_upsert(config.data_source_name, config.workspace_id, success=False)
        log_with_context(
            logger,
            logging.ERROR,
            "Error uploading document to data source.",
            status=response.status_code,
            **context,
        )
        raise DataSourceError(
            f"Error uploading to data source: HTTP {response.status_code}",
            operation="upsert",
            status_code=response.status_code,
        )

    async def delete_document(
        self,
        config: DataSourceConfig,
        document_id: str,
        logger_args: dict[str, Any] | None = None,
    ) -> None:
        """
        Delete a document. Not retried.

        Args:
            config: Target data source
            document_id: Document id within the data source
            logger_args: Extra context attached to log records

        Raises:
            DataSourceError: On transport error or non-2xx response
        """
        context = {**(logger_args or {}), "document_id": document_id}
        try:
            response = await self._http.delete(
                self.document_url(config, document_id),
                headers=self._headers(config),
            )
        except httpx.HTTPError as e:
            log_with_context(
                logger,
                logging.ERROR,
                "Error deleting document from data source.",
                error=repr(e),
                **context,
            )
            raise DataSourceError(
                f"Error deleting from data source: {e!r}",
                operation="delete",
            ) from e

        if not response.is_success:
            log_with_context(
                logger,
                logging.ERROR,
                "Error deleting document from data source.",
                status=response.status_code,
                **context,
            )
            raise DataSourceError(
                f"Error deleting from data source: HTTP {response.status_code}",
                operation="delete",
                status_code=response.status_code,
            )

        log_with_context(
            logger,
            logging.INFO,
            "Successfully deleted document from data source.",
            **context,
        )
