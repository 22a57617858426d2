from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

FlagStatus = Literal["normal", "low", "high", "critical"]


class LabValue(BaseModel):
    """Canonical lab value, the unit of work of the insight pipeline."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(description="Free-text lab test name")
    value: int | float | str | None = Field(description="Measured value; only numbers are range-checked")
    unit: str | None = Field(default=None, description="Unit of measurement")
    reference_min: float | None = Field(default=None, alias="referenceMin")
    reference_max: float | None = Field(default=None, alias="referenceMax")
    flag: FlagStatus | None = None


class PatientInfo(BaseModel):
    """Patient demographic information."""
    name: str = Field(description="Patient full name")
    age: int | float = Field(description="Patient age in years")
    gender: str = Field(description="M, F, Male, Female or Other")
    email: str | None = None
    phone: str | None = None
    patient_id: str | None = None


class TestResult(BaseModel):
    value: int | float | str | None = None
    unit: str | None = None
    raw_text: str | None = None


class ReferenceRange(BaseModel):
    low: float | None = None
    high: float | None = None
    condition: str | None = None


class TestFlag(BaseModel):
    status: FlagStatus
    flag_reason: str | None = None


class Test(BaseModel):
    """Single test inside a categorized (complex) report."""
    test_name: str
    result: TestResult
    reference_range: ReferenceRange | None = None
    flag: TestFlag | None = None


class TestCategory(BaseModel):
    category: str
    subcategory: str | None = None
    tests: list[Test]


class ReportMetadata(BaseModel):
    sample_collected: str | None = None
    reported_on: str | None = None
    referring_doctor: str | None = None
    lab_id: str | None = None


class AbnormalTest(BaseModel):
    test_name: str
    category: str
    result_value: int | float | str
    flag: str


class LabSummary(BaseModel):
    abnormal_tests: list[AbnormalTest] = Field(default_factory=list)
    critical_alert: bool = False
    doctor_notes: str | None = None
    lab_comments: str | None = None


class HealthReport(BaseModel):
    """Uploaded report in either the simple (lab_values) or complex (tests) shape."""
    report_id: str | None = None
    patient: PatientInfo
    test_date: str | None = None
    lab_name: str | None = None
    lab_values: list[LabValue] | None = None
    tests: list[TestCategory] | None = None
    metadata: ReportMetadata | None = None
    summary: LabSummary | None = None
    notes: str | None = None
    created_at: str | None = None


class ReportValidationResult(BaseModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
