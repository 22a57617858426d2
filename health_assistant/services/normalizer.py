import re


def normalize_lab_name(name: str) -> str:
    """Lookup key for free-text lab names: "Total Bilirubin" -> "total_bilirubin"."""
    collapsed = re.sub(r"\s+", "_", name.lower())
    return re.sub(r"[^a-z0-9_]", "", collapsed)
