"""Job lifecycle models for the REopt client.

A job request is an opaque JSON document the client never inspects. The
service assigns a JobHandle on acceptance; every status fetch returns a
JobStatus snapshot, and the controller finishes with a JobResult.
"""

from enum import StrEnum
from typing import Any

from pydantic import Field, field_validator

from reopt_client.models.common import ReoptBase, UTCTimestamp, utc_now

JobRequest = dict[str, Any]


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class JobState(StrEnum):
    """Remote job status, normalized from the service's status string."""

    PENDING = "PENDING"
    RUNNING = "RUNNING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in (JobState.SUCCEEDED, JobState.FAILED)


class JobPhase(StrEnum):
    """Controller state machine: SUBMITTED -> POLLING -> terminal phase."""

    SUBMITTED = "SUBMITTED"
    POLLING = "POLLING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    TIMED_OUT = "TIMED_OUT"


# ---------------------------------------------------------------------------
# Handle and status snapshot
# ---------------------------------------------------------------------------


class JobHandle(ReoptBase, frozen=True):
    """Service-assigned job identifier.

    Only meaningful against the base URL and API key it was obtained with.
    """

    run_uuid: str = Field(..., min_length=1)

    @field_validator("run_uuid")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            msg = "run_uuid must not be blank."
            raise ValueError(msg)
        return v.strip()

    def __str__(self) -> str:
        return self.run_uuid


class JobMessages(ReoptBase):
    """The ``messages`` block of a results document."""

    info: str = ""
    errors: Any = Field(default_factory=dict)
    warnings: Any = Field(default_factory=dict)
    has_stacktrace: bool = False


class JobStatus(ReoptBase):
    """One snapshot of a remote job's status."""

    state: JobState
    raw_status: str = ""
    outputs: dict[str, Any] = Field(default_factory=dict)
    messages: JobMessages = Field(default_factory=JobMessages)
    document: dict[str, Any] = Field(
        default_factory=dict,
        description="Full response body as returned by the service.",
    )
    fetched_at: UTCTimestamp = Field(default_factory=utc_now)

    @property
    def is_terminal(self) -> bool:
        return self.state.is_terminal


# ---------------------------------------------------------------------------
# Polling options and final result
# ---------------------------------------------------------------------------


class PollOptions(ReoptBase):
    """Configuration for one controller run.

    When ``handle`` is set, submission is skipped and polling resumes
    against the existing job.
    """

    interval_s: float = Field(default=5.0, ge=0.0)
    max_attempts: int = Field(default=120, ge=1)
    handle: JobHandle | None = None


class JobResult(ReoptBase):
    """Terminal outcome of a controller run."""

    handle: JobHandle
    phase: JobPhase
    status: JobStatus
    fetch_count: int = Field(..., ge=1)
    sleep_count: int = Field(..., ge=0)
    submitted: bool = Field(
        ...,
        description="True if this run submitted the job, False on resume.",
    )

    @field_validator("phase")
    @classmethod
    def _terminal_phase(cls, v: JobPhase) -> JobPhase:
        if v not in (JobPhase.COMPLETED, JobPhase.FAILED):
            msg = f"JobResult phase must be COMPLETED or FAILED, got {v}."
            raise ValueError(msg)
        return v

    @property
    def succeeded(self) -> bool:
        return self.phase == JobPhase.COMPLETED

    @property
    def response(self) -> dict[str, Any]:
        """Raw results document, suitable for persisting."""
        return self.status.document
