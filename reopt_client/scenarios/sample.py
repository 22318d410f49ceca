"""Sample REopt scenario and custom electric rate attachment."""

import copy
import logging

from reopt_client.models.job import JobRequest
from reopt_client.storage.artifact_store import ArtifactCategory, ArtifactStore

logger = logging.getLogger(__name__)


def create_sample_scenario() -> JobRequest:
    """Retail store in Lancaster, CA with PV and a URDB tariff."""
    return {
        "Site": {
            "longitude": -118.1164613,
            "latitude": 34.5794343,
        },
        "PV": {
            "array_type": 0,
        },
        "ElectricLoad": {
            "doe_reference_name": "RetailStore",
            "annual_kwh": 100000.0,
            "year": 2017,
        },
        "ElectricTariff": {
            "urdb_label": "5ed6c1a15457a3367add15ae",
        },
        "Financial": {
            "elec_cost_escalation_rate_fraction": 0.026,
            "owner_discount_rate_fraction": 0.081,
            "analysis_years": 20,
            "offtaker_tax_rate_fraction": 0.4,
            "owner_tax_rate_fraction": 0.4,
            "om_cost_escalation_rate_fraction": 0.025,
        },
    }


def attach_custom_rate(
    request: JobRequest,
    store: ArtifactStore,
    rate_name: str,
) -> JobRequest:
    """Return a copy of ``request`` with a stored rate as ``urdb_response``.

    If no rate is stored under ``rate_name`` the request is returned
    unchanged.
    """
    if not store.exists(ArtifactCategory.RATE, rate_name):
        logger.warning("No custom electric rate named %r; using request as-is", rate_name)
        return request

    rate = store.load(ArtifactCategory.RATE, rate_name)
    updated = copy.deepcopy(request)
    updated.setdefault("ElectricTariff", {})["urdb_response"] = rate
    logger.info("Attached custom electric rate %r", rate_name)
    return updated
