from pydantic import BaseModel, Field


class ReferenceEntry(BaseModel):
    name: str
    min: float
    max: float
    unit: str


class ReferenceLookup(BaseModel):
    """Result of looking up a single lab's reference range by free-text name."""
    success: bool
    lab_name: str | None = None
    reference_min: float | None = None
    reference_max: float | None = None
    unit: str | None = None
    description: str | None = None
    error: str | None = None
    suggestions: list[str] = Field(default_factory=list)
