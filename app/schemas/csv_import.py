"""CSV import schemas for API response validation."""

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import EnvelopeSchema
from app.services.csv_import_service import CsvImportSummary, CsvPreview


class ProcessedRecordSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    employee_id: str
    nik: str | None = None
    role: str


class SampleRowSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    row: int
    original: dict[str, str]
    processed: ProcessedRecordSchema


class RowErrorSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    row: int
    field: str
    error: str
    value: str


class ValidationSummarySchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    valid_records: int = Field(..., alias="validRecords")
    errors: list[RowErrorSchema]


class CsvPreviewSchema(BaseModel):
    """What importing an uploaded file would do."""

    model_config = ConfigDict(populate_by_name=True)

    total_records: int = Field(..., alias="totalRecords")
    detected_columns: list[str] = Field(..., alias="detectedColumns")
    column_mapping: dict[str, str] = Field(..., alias="columnMapping")
    sample_data: list[SampleRowSchema] = Field(..., alias="sampleData")
    validation: ValidationSummarySchema

    @classmethod
    def from_preview(cls, preview: CsvPreview) -> "CsvPreviewSchema":
        return cls(
            total_records=preview.total_records,
            detected_columns=preview.detected_columns,
            column_mapping=preview.column_mapping,
            sample_data=[SampleRowSchema.model_validate(row) for row in preview.sample_data],
            validation=ValidationSummarySchema(
                valid_records=preview.valid_records,
                errors=[RowErrorSchema.model_validate(e) for e in preview.errors],
            ),
        )


class CsvPreviewResponseSchema(EnvelopeSchema):
    data: CsvPreviewSchema


class SkippedRecordSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    employee_id: str
    error: str


class CsvImportSummarySchema(BaseModel):
    """Outcome of a confirmed import."""

    model_config = ConfigDict(populate_by_name=True)

    total_records: int = Field(..., alias="totalRecords")
    imported: int
    skipped: int
    validation_errors: int = Field(..., alias="validationErrors")
    import_errors: list[SkippedRecordSchema] = Field(..., alias="importErrors")

    @classmethod
    def from_summary(cls, summary: CsvImportSummary) -> "CsvImportSummarySchema":
        return cls(
            total_records=summary.total_records,
            imported=summary.imported,
            skipped=summary.skipped,
            validation_errors=summary.validation_errors,
            import_errors=[SkippedRecordSchema.model_validate(e) for e in summary.import_errors],
        )


class CsvImportResponseSchema(EnvelopeSchema):
    data: CsvImportSummarySchema
