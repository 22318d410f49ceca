"""Exception taxonomy for the REopt job client.

TransportError and RejectedError come from the service adapter,
PollingTimeoutError and CompletionHookError from the lifecycle controller,
NotFoundError from the artifact store. Nothing here is retried
automatically.
"""

from typing import Any

from reopt_client.models.job import JobHandle, JobResult


class ReoptClientError(Exception):
    """Base class for every error raised by this package."""


class TransportError(ReoptClientError):
    """Network, DNS or timeout failure talking to the REopt API.

    Also raised for a 5xx response to a submit, and for any non-success
    HTTP code on a status fetch.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class RejectedError(ReoptClientError):
    """The service refused the submitted document.

    ``payload`` is the raw error body, left unparsed for the caller.
    """

    def __init__(self, message: str, *, status_code: int, payload: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class PollingTimeoutError(ReoptClientError):
    """Bounded wait exceeded before the job reached a terminal status.

    Not fatal: the job keeps running remotely and can be resumed with
    ``handle``.
    """

    def __init__(self, handle: JobHandle, attempts: int) -> None:
        super().__init__(
            f"Polling timed out after {attempts} attempts for run_uuid {handle.run_uuid}"
        )
        self.handle = handle
        self.attempts = attempts


class NotFoundError(ReoptClientError):
    """Requested artifact does not exist in the store."""

    def __init__(self, category: str, name: str) -> None:
        super().__init__(f"Artifact not found: {category}/{name}")
        self.category = category
        self.name = name


class CompletionHookError(ReoptClientError):
    """The ``on_completion`` hook raised after the job reached a terminal status.

    ``result`` is the terminal JobResult the hook was given. The hook's own
    exception is chained as ``__cause__``.
    """

    def __init__(self, result: JobResult) -> None:
        super().__init__(
            f"Completion hook failed for run_uuid {result.handle.run_uuid} "
            f"in phase {result.phase}"
        )
        self.result = result
