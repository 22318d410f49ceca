"""Single-scenario workflow: persist the post, run the job, persist the result.

The shared orchestration used by ``scripts/run_single_scenario.py``. Sample
construction and printing stay with the caller.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from reopt_client.jobs.controller import JobLifecycleController
from reopt_client.models.job import JobHandle, JobRequest, JobResult, PollOptions
from reopt_client.presenter.summary import ResultSummary, summarize
from reopt_client.storage.artifact_store import ArtifactCategory, ArtifactStore

logger = logging.getLogger(__name__)


@dataclass
class ScenarioOutcome:
    """Result of one single-scenario run."""

    result: JobResult
    summary: ResultSummary
    output_path: Path
    input_path: Path | None = None


async def run_single_scenario(
    controller: JobLifecycleController,
    store: ArtifactStore,
    *,
    request: JobRequest | None = None,
    input_name: str = "post",
    output_name: str = "results_file",
    options: PollOptions | None = None,
    resume_run_uuid: str | None = None,
) -> ScenarioOutcome:
    """Run one scenario end to end.

    With ``resume_run_uuid`` the job is re-attached and nothing is submitted
    or saved under REQUEST. Otherwise ``request`` is saved under
    ``input_name``, reloaded, and submitted. Either way the raw response is
    saved under ``output_name`` once a terminal status is reached.

    Raises:
        ValueError: If neither ``request`` nor ``resume_run_uuid`` is given.
        PollingTimeoutError, TransportError, RejectedError: From the controller.
    """
    opts = options or PollOptions()
    output_path = store.path_for(ArtifactCategory.OUTPUT, output_name)
    input_path: Path | None = None

    def _save_response(result: JobResult) -> None:
        store.save(ArtifactCategory.OUTPUT, output_name, result.response)

    if resume_run_uuid:
        handle = JobHandle(run_uuid=resume_run_uuid)
        result = await controller.resume(handle, opts, on_completion=_save_response)
    else:
        if request is None:
            msg = "Either a request or a run_uuid to resume is required."
            raise ValueError(msg)
        input_path = store.save(ArtifactCategory.REQUEST, input_name, request)
        submitted = store.load(ArtifactCategory.REQUEST, input_name)
        logger.info("Loaded POST data from %s", input_path)
        result = await controller.run(submitted, opts, on_completion=_save_response)

    return ScenarioOutcome(
        result=result,
        summary=summarize(result),
        output_path=output_path,
        input_path=input_path,
    )
