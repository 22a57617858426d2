import logging
from typing import Literal

from health_assistant.schemas.report import HealthReport, LabValue, TestCategory

logger = logging.getLogger(__name__)

ReportShape = Literal["simple", "complex"]


def resolve_shape(report: HealthReport) -> ReportShape:
    # lab_values wins whenever it has entries, even if tests is also present.
    if report.lab_values:
        return "simple"
    return "complex"


def _is_numeric(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _tests_to_lab_values(categories: list[TestCategory]) -> list[LabValue]:
    lab_values: list[LabValue] = []
    for category in categories:
        for test in category.tests:
            value = test.result.value
            # Qualitative results ("positive", "negative") cannot be range-checked and are
            # dropped without a warning to the caller.
            if not _is_numeric(value):
                logger.debug("Dropping non-numeric result for %s in %s", test.test_name, category.category)
                continue
            # A bound of 0 is kept as a real bound; only a missing or null bound means "no bound".
            reference = test.reference_range
            lab_values.append(
                LabValue(
                    name=test.test_name,
                    value=value,
                    unit=test.result.unit or "",
                    reference_min=reference.low if reference else None,
                    reference_max=reference.high if reference else None,
                    flag=test.flag.status if test.flag else "normal",
                )
            )
    return lab_values


def to_lab_values(report: HealthReport) -> list[LabValue]:
    """Canonical lab values for either report shape."""
    if resolve_shape(report) == "simple":
        return list(report.lab_values)
    return _tests_to_lab_values(report.tests or [])
