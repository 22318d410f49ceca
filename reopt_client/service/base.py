"""JobService abstract interface.

A job service exposes the two network operations the job protocol needs:
submit a request, and fetch one status snapshot. Retry policy lives in the
lifecycle controller, never here.
"""

from abc import ABC, abstractmethod

from reopt_client.models.job import JobHandle, JobRequest, JobStatus


class JobService(ABC):
    """Abstract remote job service.

    Implementations hold no state between calls.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable service name for logging."""
        ...

    @abstractmethod
    async def submit(self, request: JobRequest) -> JobHandle:
        """Submit a job request.

        Args:
            request: Opaque job document, sent as-is.

        Returns:
            Handle assigned by the service.

        Raises:
            TransportError: On network failure.
            RejectedError: If the service refuses the document.
        """
        ...

    @abstractmethod
    async def fetch_status(self, handle: JobHandle) -> JobStatus:
        """Fetch a single status snapshot. Never waits for completion.

        Raises:
            TransportError: On network failure or non-success response.
        """
        ...
