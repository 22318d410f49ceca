"""Result presenter: flattened, human-oriented view of a REopt result.

Pure functions. ``summarize`` never raises: fields missing from the results
document are simply left out of the summary.
"""

from typing import Any

from pydantic import Field

from reopt_client.models.common import ReoptBase
from reopt_client.models.job import JobResult, JobStatus

TECHNOLOGIES: tuple[str, ...] = (
    "PV",
    "Wind",
    "ElectricStorage",
    "CHP",
    "Generator",
    "HotThermalStorage",
    "ColdThermalStorage",
    "AbsorptionChiller",
    "GHP",
    "Boiler",
    "SteamTurbine",
)


class ResultSummary(ReoptBase):
    """Selected financial and sizing fields from a results document."""

    status: str | None = None
    run_uuid: str | None = None
    npv: Any = None
    lifecycle_capital_costs: Any = None
    tech_sizes: dict[str, dict[str, Any]] = Field(default_factory=dict)
    ghx_number_of_boreholes: Any = None
    ghp_heat_pump_capacity_ton: Any = None
    info: str | None = None
    errors: Any = None
    warnings: Any = None
    output_categories: list[str] = Field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        """Summary with absent fields omitted."""
        return self.model_dump(exclude_none=True, exclude_defaults=True)


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _document(source: JobResult | JobStatus | dict[str, Any]) -> dict[str, Any]:
    if isinstance(source, JobResult):
        return _as_dict(source.response)
    if isinstance(source, JobStatus):
        return _as_dict(source.document)
    return _as_dict(source)


def summarize(source: JobResult | JobStatus | dict[str, Any]) -> ResultSummary:
    """Extract a ResultSummary from a result, status snapshot, or raw document."""
    doc = _document(source)
    outputs = _as_dict(doc.get("outputs"))
    fields: dict[str, Any] = {}

    if doc.get("status") is not None:
        fields["status"] = str(doc["status"])
    if doc.get("run_uuid") is not None:
        fields["run_uuid"] = str(doc["run_uuid"])

    financial = _as_dict(outputs.get("Financial"))
    if "npv" in financial:
        fields["npv"] = financial["npv"]
    if "lifecycle_capital_costs" in financial:
        fields["lifecycle_capital_costs"] = financial["lifecycle_capital_costs"]

    tech_sizes: dict[str, dict[str, Any]] = {}
    for tech in TECHNOLOGIES:
        tech_outputs = _as_dict(outputs.get(tech))
        sizes = {k: v for k, v in tech_outputs.items() if "size" in k}
        if sizes:
            tech_sizes[tech] = sizes
    if tech_sizes:
        fields["tech_sizes"] = tech_sizes

    ghx = _as_dict(_as_dict(outputs.get("GHP")).get("ghpghx_chosen_outputs"))
    if "number_of_boreholes" in ghx:
        fields["ghx_number_of_boreholes"] = ghx["number_of_boreholes"]
    if "peak_combined_heatpump_thermal_ton" in ghx:
        fields["ghp_heat_pump_capacity_ton"] = ghx["peak_combined_heatpump_thermal_ton"]

    messages = _as_dict(doc.get("messages"))
    if messages.get("info"):
        fields["info"] = str(messages["info"])
    if messages.get("errors"):
        fields["errors"] = messages["errors"]
    if messages.get("warnings"):
        fields["warnings"] = messages["warnings"]

    if outputs:
        fields["output_categories"] = list(outputs.keys())

    return ResultSummary(**fields)


def render_summary(summary: ResultSummary) -> list[str]:
    """Printable lines for a summary."""
    lines = ["=== REopt Results Summary ==="]
    if summary.status is not None:
        lines.append(f"Status: {summary.status}")
    if summary.run_uuid is not None:
        lines.append(f"Run UUID: {summary.run_uuid}")
    if summary.npv is not None:
        lines.append(f"NPV ($): {summary.npv}")
    if summary.lifecycle_capital_costs is not None:
        lines.append(f"Capital Cost, Net ($): {summary.lifecycle_capital_costs}")
    if summary.ghx_number_of_boreholes is not None:
        lines.append(f"GHX Number of Boreholes: {summary.ghx_number_of_boreholes}")
    if summary.ghp_heat_pump_capacity_ton is not None:
        lines.append(f"GHP Heat Pump Capacity (ton): {summary.ghp_heat_pump_capacity_ton}")
    for tech, sizes in summary.tech_sizes.items():
        for key, value in sizes.items():
            lines.append(f"{tech} {key}: {value}")
    if summary.info:
        lines.append(f"Info: {summary.info}")
    if summary.errors:
        lines.append(f"Errors: {summary.errors}")
    if summary.warnings:
        lines.append(f"Warnings: {summary.warnings}")
    if summary.output_categories:
        lines.append("Available output categories:")
        lines.extend(f"  {key}" for key in summary.output_categories)
    return lines
