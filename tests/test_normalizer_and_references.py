import pytest

from health_assistant.services.normalizer import normalize_lab_name
from health_assistant.services.references import (
    LAB_REFERENCES,
    all_reference_ranges,
    get_reference,
    lookup_reference_range,
    suggest_reference_names,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Hemoglobin", "hemoglobin"),
        ("Total Bilirubin", "total_bilirubin"),
        ("Alkaline   Phosphatase", "alkaline_phosphatase"),
        ("Glucose (Fasting)", "glucose_fasting"),
        ("HbA1c %", "hba1c_"),
    ],
)
def test_normalize_lab_name(raw, expected):
    assert normalize_lab_name(raw) == expected


def test_reference_table_is_read_only():
    assert len(LAB_REFERENCES) == 25
    with pytest.raises(TypeError):
        LAB_REFERENCES["glucose"] = {"min": 0, "max": 1, "unit": "mg/dL"}
    with pytest.raises(TypeError):
        LAB_REFERENCES["glucose"]["max"] = 500


def test_get_reference_uses_normalized_name():
    assert get_reference("Total Cholesterol")["max"] == 200
    assert get_reference("Vitamin D") is None


def test_lookup_reference_range_hit():
    lookup = lookup_reference_range("Total Bilirubin")
    assert lookup.success is True
    assert lookup.reference_min == 0.1
    assert lookup.reference_max == 1.2
    assert lookup.unit == "mg/dL"
    assert lookup.description == "Waste product from red blood cell breakdown"


def test_lookup_reference_range_requires_name():
    lookup = lookup_reference_range("")
    assert lookup.success is False
    assert lookup.error == "lab_name is required"


def test_lookup_reference_range_miss_offers_suggestions():
    lookup = lookup_reference_range("Hemoglobn")
    assert lookup.success is False
    assert lookup.error == "No reference range found for: Hemoglobn"
    assert lookup.suggestions[0] == "hemoglobin"


def test_suggestions_respect_threshold():
    assert suggest_reference_names("zzzz") == []
    assert suggest_reference_names("Glucose Fastin", threshold=90) == ["glucose_fasting"]


def test_all_reference_ranges_lists_every_entry():
    entries = all_reference_ranges()
    assert {entry.name for entry in entries} == set(LAB_REFERENCES)
    tsh = next(entry for entry in entries if entry.name == "tsh")
    assert (tsh.min, tsh.max, tsh.unit) == (0.4, 4.0, "mIU/L")
