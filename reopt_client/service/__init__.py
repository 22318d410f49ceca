"""Remote job service implementations."""

from reopt_client.service.base import JobService
from reopt_client.service.reopt_api import ReoptApiService, normalize_status

__all__ = [
    "JobService",
    "ReoptApiService",
    "normalize_status",
]
