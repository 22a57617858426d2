"""Range checking of canonical lab values.

The canonical reference table always wins over bounds printed on the report.
Units are never compared: a value reported in mmol/L is checked against a
mg/dL reference as-is.
"""

from health_assistant.schemas.insights import FlaggedLabValue
from health_assistant.schemas.report import LabValue
from health_assistant.services.normalizer import normalize_lab_name
from health_assistant.services.references import LAB_REFERENCES

CRITICAL_LOW_FACTOR = 0.8
CRITICAL_HIGH_FACTOR = 1.2


def _numeric(value) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _check_against_reference(value: float, low: float, high: float) -> tuple[bool, str]:
    if value < low:
        return True, "critical" if value < low * CRITICAL_LOW_FACTOR else "warning"
    if value > high:
        return True, "critical" if value > high * CRITICAL_HIGH_FACTOR else "warning"
    return False, "normal"


def _check_against_report_bounds(value: float, low: float, high: float) -> tuple[bool, str]:
    # Without a canonical reference there is no critical tier.
    if value < low or value > high:
        return True, "warning"
    return False, "normal"


def flag_lab_value(lab_value: LabValue) -> FlaggedLabValue:
    numeric = _numeric(lab_value.value)
    is_out_of_range, severity = False, "normal"

    if numeric is not None:
        reference = LAB_REFERENCES.get(normalize_lab_name(lab_value.name))
        if reference is not None:
            is_out_of_range, severity = _check_against_reference(numeric, reference["min"], reference["max"])
        elif lab_value.reference_min is not None and lab_value.reference_max is not None:
            is_out_of_range, severity = _check_against_report_bounds(
                numeric, lab_value.reference_min, lab_value.reference_max
            )

    return FlaggedLabValue(**lab_value.model_dump(), is_out_of_range=is_out_of_range, severity=severity)


def flag_lab_values(lab_values: list[LabValue]) -> list[FlaggedLabValue]:
    return [flag_lab_value(item) for item in lab_values]
