"""Structural validation of uploaded report payloads.

Every rule is evaluated so a client sees all problems with a payload in one
response. Errors block insight generation, warnings never do.
"""

import re
from typing import Any

from health_assistant.schemas.report import ReportValidationResult

ALLOWED_GENDERS = {"m", "f", "male", "female", "other"}
ISO_DATE_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def _validate_patient(patient: Any, errors: list[str]) -> None:
    if not isinstance(patient, dict):
        errors.append("Missing or invalid patient information")
        return

    if not _is_non_empty_str(patient.get("name")):
        errors.append("Patient name is required")

    age = patient.get("age")
    if not _is_number(age) or age < 0:
        errors.append("Patient age must be a valid positive number")

    gender = patient.get("gender")
    if not _is_non_empty_str(gender):
        errors.append("Patient gender is required")
    elif gender.lower() not in ALLOWED_GENDERS:
        errors.append("Patient gender must be M, F, Male, Female, or Other")


def _candidate_test_date(report: dict) -> Any:
    metadata = report.get("metadata")
    if isinstance(metadata, dict):
        from_metadata = metadata.get("reported_on") or metadata.get("sample_collected")
    else:
        from_metadata = None
    return report.get("test_date") or from_metadata


def _validate_test_date(report: dict, errors: list[str], warnings: list[str]) -> None:
    test_date = _candidate_test_date(report)
    if not test_date:
        warnings.append("Test date not found (optional for complex reports)")
    elif not isinstance(test_date, str) or not ISO_DATE_PREFIX.match(test_date):
        errors.append("Test date must be in ISO format (YYYY-MM-DD or ISO 8601)")


def _validate_lab_values(lab_values: list, errors: list[str]) -> None:
    for index, item in enumerate(lab_values):
        if not isinstance(item, dict):
            errors.append(f"Lab value at index {index} is invalid")
            continue
        if not _is_non_empty_str(item.get("name")):
            errors.append(f"Lab value at index {index} missing name")
        if "value" not in item:
            errors.append(f"Lab value at index {index} missing value")
        if not _is_non_empty_str(item.get("unit")):
            errors.append(f"Lab value at index {index} missing unit")


def _validate_test_categories(categories: list, errors: list[str]) -> None:
    for cat_index, category in enumerate(categories):
        if not isinstance(category, dict):
            errors.append(f"Test category at index {cat_index} is invalid")
            continue
        if not _is_non_empty_str(category.get("category")):
            errors.append(f"Test category at index {cat_index} missing category name")
        tests = category.get("tests")
        if not isinstance(tests, list):
            errors.append(f"Test category at index {cat_index} missing tests array")
            continue

        for test_index, test in enumerate(tests):
            if not isinstance(test, dict):
                errors.append(f"Test at category {cat_index}, index {test_index} is invalid")
                continue
            if not _is_non_empty_str(test.get("test_name")):
                errors.append(f"Test at category {cat_index}, index {test_index} missing test_name")
            result = test.get("result")
            if not isinstance(result, dict):
                errors.append(f"Test at category {cat_index}, index {test_index} missing result object")


def validate_report(payload: Any) -> ReportValidationResult:
    errors: list[str] = []
    warnings: list[str] = []

    if not isinstance(payload, dict):
        errors.append("Report must be a valid JSON object")
        return ReportValidationResult(valid=False, errors=errors, warnings=warnings)

    _validate_patient(payload.get("patient"), errors)
    _validate_test_date(payload, errors, warnings)

    lab_values = payload.get("lab_values")
    tests = payload.get("tests")
    has_lab_values = isinstance(lab_values, list) and len(lab_values) > 0
    has_tests = isinstance(tests, list) and len(tests) > 0

    if not has_lab_values and not has_tests:
        errors.append("Report must contain either lab_values array or tests array with test categories")
    if has_lab_values:
        _validate_lab_values(lab_values, errors)
    if has_tests:
        _validate_test_categories(tests, errors)

    return ReportValidationResult(valid=not errors, errors=errors, warnings=warnings)


class ReportValidationError(Exception):
    """Raised at the API boundary when an uploaded report fails validation."""

    def __init__(self, errors: list[str], warnings: list[str] | None = None):
        super().__init__("Report validation failed")
        self.errors = errors
        self.warnings = warnings or []
