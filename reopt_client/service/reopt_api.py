"""ReoptApiService: NREL REopt API over HTTP/JSON.

Submits a scenario post to ``{base_url}/job/`` and reads status snapshots
from ``{base_url}/job/{run_uuid}/results/``. The API key travels as the
``api_key`` query parameter and is never logged.
"""

import logging
from typing import Any

import httpx

from reopt_client.errors import RejectedError, TransportError
from reopt_client.models.job import (
    JobHandle,
    JobMessages,
    JobRequest,
    JobState,
    JobStatus,
)
from reopt_client.service.base import JobService

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT_S = 120.0

# Service status strings, compared lower-cased
_SUCCEEDED_STATUSES = frozenset({"optimal"})
_FAILED_STATUSES = frozenset({"error", "infeasible", "timed-out"})
_PENDING_STATUSES = frozenset({"submitted", "queued", "pending"})
_RUNNING_STATUSES = frozenset({"optimizing...", "running"})


def normalize_status(raw_status: str) -> JobState:
    """Map a REopt status string onto JobState.

    Unrecognized values map to RUNNING so polling continues.
    """
    status = raw_status.strip().lower()
    if status in _SUCCEEDED_STATUSES:
        return JobState.SUCCEEDED
    if status in _FAILED_STATUSES:
        return JobState.FAILED
    if status in _PENDING_STATUSES:
        return JobState.PENDING
    if status not in _RUNNING_STATUSES:
        logger.warning("Unrecognized REopt status %r; treating as running", raw_status)
    return JobState.RUNNING


def _error_payload(resp: httpx.Response) -> Any:
    """Return the response body as JSON if possible, else as text."""
    try:
        return resp.json()
    except ValueError:
        return resp.text


class ReoptApiService(JobService):
    """REopt job service backed by httpx.

    A fresh AsyncClient is opened per call. ``transport`` lets callers
    (and tests) supply an alternative httpx transport.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout_s: float = _DEFAULT_TIMEOUT_S,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout_s = timeout_s
        self._transport = transport

    @property
    def name(self) -> str:
        return "reopt-api"

    @property
    def base_url(self) -> str:
        return self._base_url

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout_s, transport=self._transport)

    # ------------------------------------------------------------------
    # Submit
    # ------------------------------------------------------------------

    async def submit(self, request: JobRequest) -> JobHandle:
        url = f"{self._base_url}/job/"
        logger.info("Submitting job to %s", url)

        try:
            async with self._client() as client:
                resp = await client.post(
                    url,
                    params={"api_key": self._api_key},
                    json=request,
                    headers={"Content-Type": "application/json"},
                )
        except httpx.TransportError as exc:
            raise TransportError(f"REopt submit failed: {exc}") from exc

        if resp.is_server_error:
            payload = _error_payload(resp)
            logger.error("REopt submit failed server-side (HTTP %d): %s", resp.status_code, payload)
            raise TransportError(
                f"REopt submit returned HTTP {resp.status_code}",
                status_code=resp.status_code,
                payload=payload,
            )

        if not resp.is_success:
            payload = _error_payload(resp)
            logger.error("REopt rejected job (HTTP %d): %s", resp.status_code, payload)
            raise RejectedError(
                f"REopt rejected job with HTTP {resp.status_code}",
                status_code=resp.status_code,
                payload=payload,
            )

        payload = _error_payload(resp)
        run_uuid = payload.get("run_uuid") if isinstance(payload, dict) else None
        if not run_uuid:
            raise RejectedError(
                "REopt response did not include run_uuid",
                status_code=resp.status_code,
                payload=payload,
            )

        logger.info("Job accepted, run_uuid=%s", run_uuid)
        return JobHandle(run_uuid=run_uuid)

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    async def fetch_status(self, handle: JobHandle) -> JobStatus:
        url = f"{self._base_url}/job/{handle.run_uuid}/results/"

        try:
            async with self._client() as client:
                resp = await client.get(url, params={"api_key": self._api_key})
        except httpx.TransportError as exc:
            raise TransportError(
                f"REopt status fetch failed for {handle.run_uuid}: {exc}"
            ) from exc

        if not resp.is_success:
            raise TransportError(
                f"REopt status fetch returned HTTP {resp.status_code} for {handle.run_uuid}",
                status_code=resp.status_code,
                payload=_error_payload(resp),
            )

        data = _error_payload(resp)
        if not isinstance(data, dict):
            raise TransportError(
                f"REopt status response for {handle.run_uuid} is not a JSON object",
                status_code=resp.status_code,
                payload=data,
            )
        return self._parse_status(data)

    # ------------------------------------------------------------------
    # Response parsing
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_status(data: dict[str, Any]) -> JobStatus:
        """Convert a results document into a JobStatus snapshot."""
        raw_status = str(data.get("status", ""))
        state = normalize_status(raw_status)

        outputs = data.get("outputs") if state.is_terminal else None
        messages = data.get("messages")

        return JobStatus(
            state=state,
            raw_status=raw_status,
            outputs=outputs if isinstance(outputs, dict) else {},
            messages=_parse_messages(messages),
            document=data,
        )


def _parse_messages(messages: Any) -> JobMessages:
    if not isinstance(messages, dict):
        return JobMessages()
    info = messages.get("info") or ""
    return JobMessages(
        info=info if isinstance(info, str) else str(info),
        errors=messages.get("errors") or {},
        warnings=messages.get("warnings") or {},
        has_stacktrace=bool(messages.get("has_stacktrace", False)),
    )
