"""HTTP client for the graph endpoint of the vocabulary backend."""

import asyncio
import json
import logging
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from constellation.config import settings
from constellation.models import GraphPayload

logger = logging.getLogger(__name__)


class GraphFetchError(Exception):
    """Graph could not be fetched or parsed.

    Covers transport failures, non-2xx responses and malformed payloads.
    """

    def __init__(self, message: str, status: int | None = None, detail: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.detail = detail


def _error_from_response(response: requests.Response) -> GraphFetchError:
    """Build an error from a non-2xx response, preferring the body's message."""
    message = f"HTTP error! status: {response.status_code}"
    detail = None

    text = response.text
    if text and text.strip():
        try:
            data = json.loads(text)
        except ValueError:
            data = None
        if isinstance(data, dict):
            detail = data.get("detail")
            if detail is not None and not isinstance(detail, str):
                detail = json.dumps(detail)
            message = str(data.get("message") or detail or message)

    return GraphFetchError(message, status=response.status_code, detail=detail)


class GraphClient:
    """Async-wrapped client for ``GET /graph/`` using requests."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        endpoint: str | None = None,
    ) -> None:
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.token = token or settings.api_token
        self.timeout = timeout or settings.api_timeout
        self.endpoint = endpoint or settings.graph_endpoint

        self._session: requests.Session | None = None

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.endpoint}"

    def _get_session(self) -> requests.Session:
        """Get or create requests session."""
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update({"Accept": "application/json"})
            if self.token:
                self._session.headers["Authorization"] = f"Bearer {self.token}"
            # A failed fetch surfaces as the error state, never retried here
            adapter = HTTPAdapter(max_retries=Retry(total=0))
            self._session.mount("http://", adapter)
            self._session.mount("https://", adapter)
        return self._session

    def close(self) -> None:
        """Close the HTTP session."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def _sync_get(self) -> Any:
        """Synchronous graph request (runs in thread)."""
        session = self._get_session()
        try:
            response = session.get(self.url, timeout=self.timeout)
        except requests.RequestException as e:
            raise GraphFetchError(str(e)) from e

        if not response.ok:
            raise _error_from_response(response)

        # Empty body (e.g. 204) means an empty graph
        text = response.text
        if not text or not text.strip():
            return {}

        try:
            return json.loads(text)
        except ValueError as e:
            raise GraphFetchError(f"Invalid JSON in graph response: {e}", status=response.status_code) from e

    async def fetch_graph(self) -> GraphPayload:
        """
        Fetch the full node/edge graph.

        Returns:
            Parsed graph payload

        Raises:
            GraphFetchError: On transport failure, HTTP error or malformed payload
        """
        try:
            data = await asyncio.to_thread(self._sync_get)
        except GraphFetchError as e:
            logger.error(f"Graph fetch failed: {e.message} (status={e.status})")
            raise

        try:
            payload = GraphPayload.from_dict(data)
        except (TypeError, ValueError, OverflowError) as e:
            logger.error(f"Malformed graph payload: {e}")
            raise GraphFetchError(f"Malformed graph payload: {e}") from e

        logger.info(f"Fetched graph: {len(payload.nodes)} nodes, {len(payload.edges)} edges")
        return payload
