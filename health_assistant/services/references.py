"""Canonical lab reference ranges and the reference lookup tool used by the voice agent."""

from types import MappingProxyType

from rapidfuzz import fuzz

from health_assistant.config import settings
from health_assistant.schemas.reference import ReferenceEntry, ReferenceLookup
from health_assistant.services.normalizer import normalize_lab_name


_REFERENCES = {
    "hemoglobin": {"min": 12.0, "max": 17.5, "unit": "g/dL"},
    "hematocrit": {"min": 36, "max": 46, "unit": "%"},
    "wbc": {"min": 4.5, "max": 11.0, "unit": "K/uL"},
    "rbc": {"min": 4.5, "max": 5.9, "unit": "M/uL"},
    "platelets": {"min": 150, "max": 400, "unit": "K/uL"},
    "glucose": {"min": 70, "max": 100, "unit": "mg/dL"},
    "glucose_fasting": {"min": 70, "max": 100, "unit": "mg/dL"},
    "creatinine": {"min": 0.7, "max": 1.3, "unit": "mg/dL"},
    "bun": {"min": 7, "max": 20, "unit": "mg/dL"},
    "sodium": {"min": 136, "max": 145, "unit": "mEq/L"},
    "potassium": {"min": 3.5, "max": 5.0, "unit": "mEq/L"},
    "calcium": {"min": 8.5, "max": 10.2, "unit": "mg/dL"},
    "phosphorus": {"min": 2.5, "max": 4.5, "unit": "mg/dL"},
    "magnesium": {"min": 1.7, "max": 2.2, "unit": "mg/dL"},
    "albumin": {"min": 3.5, "max": 5.0, "unit": "g/dL"},
    "total_protein": {"min": 6.0, "max": 8.3, "unit": "g/dL"},
    "ast": {"min": 10, "max": 40, "unit": "U/L"},
    "alt": {"min": 7, "max": 56, "unit": "U/L"},
    "alkaline_phosphatase": {"min": 44, "max": 147, "unit": "U/L"},
    "total_bilirubin": {"min": 0.1, "max": 1.2, "unit": "mg/dL"},
    "ldl": {"min": 0, "max": 100, "unit": "mg/dL"},
    "hdl": {"min": 40, "max": 300, "unit": "mg/dL"},
    "triglycerides": {"min": 0, "max": 150, "unit": "mg/dL"},
    "total_cholesterol": {"min": 0, "max": 200, "unit": "mg/dL"},
    "tsh": {"min": 0.4, "max": 4.0, "unit": "mIU/L"},
}

LAB_REFERENCES = MappingProxyType({name: MappingProxyType(entry) for name, entry in _REFERENCES.items()})

LAB_DESCRIPTIONS = {
    "hemoglobin": "Protein in red blood cells that carries oxygen throughout the body",
    "hematocrit": "Percentage of red blood cells in total blood volume",
    "wbc": "White blood cells that help fight infections",
    "rbc": "Red blood cells that carry oxygen",
    "platelets": "Blood cells that help with clotting",
    "glucose": "Blood sugar level",
    "glucose_fasting": "Blood sugar level after fasting",
    "creatinine": "Kidney function marker",
    "bun": "Kidney function marker (blood urea nitrogen)",
    "sodium": "Electrolyte important for nerve and muscle function",
    "potassium": "Electrolyte important for heart and muscle function",
    "calcium": "Mineral important for bones and teeth",
    "phosphorus": "Mineral important for bone health",
    "magnesium": "Mineral important for muscle and nerve function",
    "albumin": "Protein that helps maintain blood pressure and transport nutrients",
    "total_protein": "Total amount of proteins in blood",
    "ast": "Liver enzyme (aspartate aminotransferase)",
    "alt": "Liver enzyme (alanine aminotransferase)",
    "alkaline_phosphatase": "Enzyme related to liver and bone health",
    "total_bilirubin": "Waste product from red blood cell breakdown",
    "ldl": "Low-density lipoprotein (bad cholesterol)",
    "hdl": "High-density lipoprotein (good cholesterol)",
    "triglycerides": "Type of fat in blood",
    "total_cholesterol": "Total amount of cholesterol in blood",
    "tsh": "Thyroid stimulating hormone (thyroid function)",
}


def get_reference(name: str):
    """Canonical reference for a free-text lab name, or None when the table has no entry."""
    return LAB_REFERENCES.get(normalize_lab_name(name))


def get_lab_description(normalized_name: str) -> str:
    return LAB_DESCRIPTIONS.get(normalized_name, "Lab value")


def suggest_reference_names(lab_name: str, threshold: int | None = None, limit: int = 3) -> list[str]:
    score_threshold = threshold if threshold is not None else settings.reference_suggestion_threshold
    name_norm = normalize_lab_name(lab_name)
    if not name_norm:
        return []

    scored = []
    for candidate in LAB_REFERENCES:
        score = fuzz.ratio(name_norm, candidate)
        if score >= score_threshold:
            scored.append((score, candidate))
    scored.sort(key=lambda item: (-item[0], item[1]))
    return [candidate for _, candidate in scored[:limit]]


def lookup_reference_range(lab_name: str | None) -> ReferenceLookup:
    if not lab_name:
        return ReferenceLookup(success=False, error="lab_name is required")

    normalized = normalize_lab_name(lab_name)
    reference = LAB_REFERENCES.get(normalized)
    if reference is None:
        return ReferenceLookup(
            success=False,
            lab_name=lab_name,
            error=f"No reference range found for: {lab_name}",
            suggestions=suggest_reference_names(lab_name),
        )

    return ReferenceLookup(
        success=True,
        lab_name=lab_name,
        reference_min=reference["min"],
        reference_max=reference["max"],
        unit=reference["unit"],
        description=get_lab_description(normalized),
    )


def all_reference_ranges() -> list[ReferenceEntry]:
    return [
        ReferenceEntry(name=name, min=entry["min"], max=entry["max"], unit=entry["unit"])
        for name, entry in LAB_REFERENCES.items()
    ]
