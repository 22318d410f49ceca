"""Run a single REopt scenario: submit, poll, save, and print a summary.

Saves the POST under inputs/, the raw response under outputs/, and prints
the results summary. If polling times out, the printed run_uuid can be passed
back with --resume to pick the job up again without resubmitting.

Usage:
    python -m scripts.run_single_scenario [--input-name post_2] [--output-name results_file]
    python -m scripts.run_single_scenario --resume <run_uuid>

The API key comes from --api-key or REOPT_API_KEY.
"""

from __future__ import annotations

import argparse
import asyncio
import sys

import structlog

from reopt_client.config.settings import Settings, get_settings
from reopt_client.errors import PollingTimeoutError, ReoptClientError
from reopt_client.jobs.controller import JobLifecycleController
from reopt_client.models.job import PollOptions
from reopt_client.observability.logs import configure_logging
from reopt_client.presenter.summary import render_summary
from reopt_client.scenarios.sample import attach_custom_rate, create_sample_scenario
from reopt_client.service.reopt_api import ReoptApiService
from reopt_client.storage.artifact_store import ArtifactCategory, ArtifactStore
from reopt_client.workflow import run_single_scenario

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_TIMED_OUT = 2


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Submit a REopt scenario and wait for results",
    )
    parser.add_argument(
        "--api-key",
        default=settings.REOPT_API_KEY,
        help="NREL developer API key (default: REOPT_API_KEY)",
    )
    parser.add_argument(
        "--input-name",
        default="post_2",
        help="Name to save the POST under in inputs/",
    )
    parser.add_argument(
        "--output-name",
        default="results_file",
        help="Name to save the response under in outputs/",
    )
    parser.add_argument(
        "--resume",
        metavar="RUN_UUID",
        default=None,
        help="Resume polling an already-submitted job instead of submitting",
    )
    parser.add_argument(
        "--input",
        dest="saved_input",
        metavar="NAME",
        default=None,
        help="Submit a previously saved POST from inputs/ instead of the sample",
    )
    parser.add_argument(
        "--rate",
        default=None,
        help="Attach electric_rates/<RATE>.json as the tariff urdb_response",
    )
    parser.add_argument(
        "--poll-interval",
        type=float,
        default=settings.REOPT_POLL_INTERVAL_S,
        help="Seconds between status fetches",
    )
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=settings.REOPT_POLL_MAX_ATTEMPTS,
        help="Status fetches before giving up",
    )
    return parser


async def _run(args: argparse.Namespace, settings: Settings) -> int:
    log = structlog.get_logger()
    store = ArtifactStore(settings.ARTIFACT_ROOT)
    service = ReoptApiService(
        settings.REOPT_BASE_URL,
        args.api_key,
        timeout_s=settings.REOPT_HTTP_TIMEOUT_S,
    )
    controller = JobLifecycleController(service)
    try:
        options = PollOptions(interval_s=args.poll_interval, max_attempts=args.max_attempts)

        request = None
        if not args.resume:
            if args.saved_input:
                request = store.load(ArtifactCategory.REQUEST, args.saved_input)
            else:
                request = create_sample_scenario()
                log.info("sample_scenario_created")
            if args.rate:
                request = attach_custom_rate(request, store, args.rate)

        outcome = await run_single_scenario(
            controller,
            store,
            request=request,
            input_name=args.input_name,
            output_name=args.output_name,
            options=options,
            resume_run_uuid=args.resume,
        )
    except PollingTimeoutError as exc:
        log.warning("polling_timed_out", run_uuid=exc.handle.run_uuid, attempts=exc.attempts)
        print(f"Job still running. Resume with: --resume {exc.handle.run_uuid}")
        return EXIT_TIMED_OUT
    except ReoptClientError as exc:
        log.error("scenario_failed", error=str(exc), payload=getattr(exc, "payload", None))
        print(f"Error running REopt scenario: {exc}")
        return EXIT_FAILED
    except ValueError as exc:
        # Invalid poll options, artifact names or run_uuid
        log.error("invalid_arguments", error=str(exc))
        print(f"Invalid arguments: {exc}")
        return EXIT_FAILED

    log.info(
        "scenario_finished",
        run_uuid=outcome.result.handle.run_uuid,
        phase=outcome.result.phase.value,
        output_path=str(outcome.output_path),
    )
    print()
    for line in render_summary(outcome.summary):
        print(line)

    return EXIT_OK if outcome.result.succeeded else EXIT_FAILED


def main(argv: list[str] | None = None) -> int:
    """Single-scenario entry point."""
    settings = get_settings()
    args = build_parser(settings).parse_args(argv)
    configure_logging(settings)

    if not args.api_key:
        print("No API key: pass --api-key or set REOPT_API_KEY")
        return EXIT_FAILED

    return asyncio.run(_run(args, settings))


if __name__ == "__main__":
    sys.exit(main())
