"""Job lifecycle controller.

Owns the submit -> poll -> terminate state machine for a single job:

- SUBMITTED: the request is handed to the service once (skipped on resume)
- POLLING: status is fetched every ``interval_s`` seconds
- COMPLETED / FAILED: a terminal status was observed, polling stops
- TIMED_OUT: ``max_attempts`` fetches without a terminal status

Persistence is delegated to the caller's ``on_completion`` hook.

Precondition: at most one ``run`` per job handle at a time. Concurrent runs
against the same handle are not guarded against.
"""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable

from reopt_client.errors import CompletionHookError, PollingTimeoutError
from reopt_client.models.job import (
    JobHandle,
    JobPhase,
    JobRequest,
    JobResult,
    JobState,
    PollOptions,
)
from reopt_client.service.base import JobService

logger = logging.getLogger(__name__)

CompletionHook = Callable[[JobResult], Awaitable[None] | None]
Sleeper = Callable[[float], Awaitable[None]]


class JobLifecycleController:
    """Submits a job and polls it to a terminal status."""

    def __init__(self, service: JobService, *, sleep: Sleeper = asyncio.sleep) -> None:
        self._service = service
        self._sleep = sleep

    async def run(
        self,
        request: JobRequest | None,
        options: PollOptions | None = None,
        on_completion: CompletionHook | None = None,
    ) -> JobResult:
        """Run one job to a terminal status.

        Args:
            request: Job document. Not read when ``options.handle`` is set.
            options: Poll interval, attempt bound, optional resume handle.
            on_completion: Called once with the result on a terminal status.

        Returns:
            JobResult in phase COMPLETED or FAILED.

        Raises:
            TransportError: From the service, unchanged.
            RejectedError: From the service on submit, unchanged.
            PollingTimeoutError: If no terminal status within ``max_attempts``.
            CompletionHookError: If ``on_completion`` raises. The terminal
                result is on ``.result`` and the hook's exception is the cause.
            ValueError: If neither a request nor a handle is given.
        """
        opts = options or PollOptions()

        if opts.handle is not None:
            handle = opts.handle
            submitted = False
            logger.info("Resuming job %s without resubmitting", handle.run_uuid)
        else:
            if request is None:
                msg = "A job request is required when no handle is supplied."
                raise ValueError(msg)
            handle = await self._service.submit(request)
            submitted = True
            logger.info("Job %s in phase %s", handle.run_uuid, JobPhase.SUBMITTED)

        result = await self._poll(handle, opts, submitted=submitted)

        if on_completion is not None:
            try:
                outcome = on_completion(result)
                if inspect.isawaitable(outcome):
                    await outcome
            except Exception as exc:
                logger.error("Completion hook failed for job %s: %s", handle.run_uuid, exc)
                raise CompletionHookError(result) from exc

        return result

    async def resume(
        self,
        handle: JobHandle,
        options: PollOptions | None = None,
        on_completion: CompletionHook | None = None,
    ) -> JobResult:
        """Re-attach to an already-submitted job. Never submits."""
        opts = (options or PollOptions()).model_copy(update={"handle": handle})
        return await self.run(None, opts, on_completion)

    # ------------------------------------------------------------------
    # Polling
    # ------------------------------------------------------------------

    async def _poll(
        self,
        handle: JobHandle,
        opts: PollOptions,
        *,
        submitted: bool,
    ) -> JobResult:
        logger.info(
            "Job %s in phase %s (interval %.1fs, max %d attempts)",
            handle.run_uuid, JobPhase.POLLING, opts.interval_s, opts.max_attempts,
        )
        sleeps = 0

        for attempt in range(1, opts.max_attempts + 1):
            status = await self._service.fetch_status(handle)

            if status.is_terminal:
                phase = (
                    JobPhase.COMPLETED
                    if status.state == JobState.SUCCEEDED
                    else JobPhase.FAILED
                )
                logger.info(
                    "Job %s finished with status %r after %d fetches",
                    handle.run_uuid, status.raw_status, attempt,
                )
                return JobResult(
                    handle=handle,
                    phase=phase,
                    status=status,
                    fetch_count=attempt,
                    sleep_count=sleeps,
                    submitted=submitted,
                )

            if attempt == opts.max_attempts:
                break

            logger.info("Status: %s... waiting...", status.raw_status or status.state)
            await self._sleep(opts.interval_s)
            sleeps += 1

        logger.warning(
            "Job %s in phase %s after %d attempts",
            handle.run_uuid, JobPhase.TIMED_OUT, opts.max_attempts,
        )
        raise PollingTimeoutError(handle, opts.max_attempts)
