"""CSV import service for bulk-creating users.

An upload is parsed, its columns are matched to user fields (``name``,
``employee_id``, ``nik``, ``role``) by header name, and each row is
normalized and validated. Previewing reports the detected mapping and
problems without writing anything; confirming imports the valid rows and
skips employee IDs that already exist.
"""

import csv
import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from io import StringIO

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.exceptions import ValidationException
from app.models.user import UserRole
from app.services.activity_service import ActivityService
from app.services.user_service import UserService

logger = logging.getLogger(__name__)

IMPORT_FIELDS = ("name", "employee_id", "nik", "role")

# Patterns per user field; a header matching any of them is a candidate
COLUMN_PATTERNS: Mapping[str, Sequence[re.Pattern[str]]] = {
    "name": [
        re.compile(r"nama|name|full.*name|employee.*name|user.*name", re.IGNORECASE),
        re.compile(r"^nama$", re.IGNORECASE),
        re.compile(r"^name$", re.IGNORECASE),
    ],
    "employee_id": [
        re.compile(r"emp.*id|employee.*id|employee_number|nip|id.*pegawai", re.IGNORECASE),
        re.compile(r"^emp_id$", re.IGNORECASE),
        re.compile(r"^employee_id$", re.IGNORECASE),
        re.compile(r"^nip$", re.IGNORECASE),
    ],
    "nik": [
        re.compile(r"nik|no.*ktp|identity.*number|ktp|nomor.*induk", re.IGNORECASE),
        re.compile(r"^nik$", re.IGNORECASE),
        re.compile(r"^no_ktp$", re.IGNORECASE),
        re.compile(r"^ktp$", re.IGNORECASE),
    ],
    "role": [
        re.compile(r"role|jabatan|position|tipe|user.*role", re.IGNORECASE),
        re.compile(r"^role$", re.IGNORECASE),
        re.compile(r"^jabatan$", re.IGNORECASE),
        re.compile(r"^position$", re.IGNORECASE),
    ],
}

PREVIEW_SAMPLE_SIZE = 3
PREVIEW_ERROR_LIMIT = 10
IMPORT_ERROR_LIMIT = 20

CsvRecord = dict[str, str]


@dataclass
class ProcessedRecord:
    """A CSV row normalized into user fields."""

    name: str
    employee_id: str
    nik: str | None
    role: str


@dataclass
class RowError:
    """A validation problem with one field of one row."""

    row: int
    field: str
    error: str
    value: str


@dataclass
class SkippedRecord:
    """A valid row that was not imported."""

    employee_id: str
    error: str


@dataclass
class SampleRow:
    """A preview row in both its original and processed form."""

    row: int
    original: CsvRecord
    processed: ProcessedRecord


@dataclass
class ValidationResult:
    valid_records: list[ProcessedRecord] = field(default_factory=list)
    errors: list[RowError] = field(default_factory=list)


@dataclass
class CsvPreview:
    """What an import of the file would do."""

    total_records: int
    detected_columns: list[str]
    column_mapping: dict[str, str]
    sample_data: list[SampleRow]
    valid_records: int
    errors: list[RowError]


@dataclass
class CsvImportSummary:
    """Outcome of a confirmed import."""

    total_records: int
    imported: int
    skipped: int
    validation_errors: int
    import_errors: list[SkippedRecord]


def detect_column_mapping(headers: Sequence[str]) -> dict[str, str]:
    """Match CSV headers to user fields.

    Every header matching one of a field's patterns is scored: 100 when it
    has the same length as the field name, 90 when it equals the field name
    ignoring case, 80 when it contains the field name and 70 otherwise. The
    best-scoring header not already claimed by an earlier field wins.

    Args:
        headers: CSV header row

    Returns:
        Mapping of field name to header, for the fields that matched
    """
    mapping: dict[str, str] = {}
    used_headers: set[str] = set()

    for field_name, patterns in COLUMN_PATTERNS.items():
        best_match: str | None = None
        best_score = 0

        for header in headers:
            if header in used_headers:
                continue
            for pattern in patterns:
                if not pattern.search(header):
                    continue
                if len(header) == len(field_name):
                    score = 100
                elif header.lower() == field_name.lower():
                    score = 90
                elif field_name in header:
                    score = 80
                else:
                    score = 70

                if score > best_score:
                    best_score = score
                    best_match = header

        if best_match is not None:
            mapping[field_name] = best_match
            used_headers.add(best_match)

    return mapping


def process_record(record: Mapping[str, str], mapping: Mapping[str, str]) -> ProcessedRecord:
    """Normalize one CSV row using a column mapping.

    The role falls back to ``user`` when it is empty or not a known role.
    """

    def cell(field_name: str) -> str:
        header = mapping.get(field_name)
        if not header:
            return ""
        return (record.get(header) or "").strip()

    role = cell("role").lower()
    if role not in (UserRole.ADMIN.value, UserRole.USER.value):
        role = UserRole.USER.value

    return ProcessedRecord(
        name=cell("name"),
        employee_id=cell("employee_id"),
        nik=cell("nik") or None,
        role=role,
    )


def validate_records(
    records: Sequence[Mapping[str, str]], mapping: Mapping[str, str]
) -> ValidationResult:
    """Process every row and collect the valid ones.

    Rows are numbered from 2 so they match line numbers in the file, the
    header being line 1. A row without a name or employee ID is invalid.
    """
    result = ValidationResult()

    for index, record in enumerate(records):
        row_number = index + 2
        processed = process_record(record, mapping)
        row_valid = True

        if not processed.name:
            result.errors.append(
                RowError(
                    row=row_number,
                    field="name",
                    error="Name is required",
                    value=record.get(mapping.get("name", ""), "") or "",
                )
            )
            row_valid = False

        if not processed.employee_id:
            result.errors.append(
                RowError(
                    row=row_number,
                    field="employee_id",
                    error="Employee ID is required",
                    value=record.get(mapping.get("employee_id", ""), "") or "",
                )
            )
            row_valid = False

        if row_valid:
            result.valid_records.append(processed)

    return result


def parse_csv(content: bytes | str) -> tuple[list[str], list[CsvRecord]]:
    """Parse CSV content into its header row and a dict per data row.

    Blank lines are skipped and short rows are padded with empty cells.

    Raises:
        ValidationException: If the content is not UTF-8 or has no data rows
    """
    if isinstance(content, bytes):
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ValidationException("CSV file must be UTF-8 encoded") from e
    else:
        text = content.lstrip("\ufeff")

    reader = csv.reader(StringIO(text.replace("\r\n", "\n").replace("\r", "\n")))
    try:
        headers = [header.strip() for header in next(reader)]
    except StopIteration as e:
        raise ValidationException("CSV file is empty") from e

    records: list[CsvRecord] = []
    for row in reader:
        if not row or all(not cell.strip() for cell in row):
            continue
        if len(row) < len(headers):
            row = row + [""] * (len(headers) - len(row))
        records.append(dict(zip(headers, row, strict=False)))

    if not records:
        raise ValidationException("CSV file is empty")

    return headers, records


class CsvImportService:
    """Service previewing and importing user CSV files."""

    def __init__(
        self,
        db: Session,
        user_service: UserService,
        activity_service: ActivityService,
    ) -> None:
        """Initialize CSV import service.

        Args:
            db: SQLAlchemy database session
            user_service: Service used to create the imported users
            activity_service: Activity log recorder
        """
        self.db = db
        self.user_service = user_service
        self.activity_service = activity_service

    def preview(self, content: bytes | str) -> CsvPreview:
        """Parse a file and report what importing it would do.

        Raises:
            ValidationException: If the file cannot be parsed or is empty
        """
        headers, records = parse_csv(content)
        mapping = detect_column_mapping(headers)
        validation = validate_records(records, mapping)

        sample = [
            SampleRow(row=index + 2, original=record, processed=process_record(record, mapping))
            for index, record in enumerate(records[:PREVIEW_SAMPLE_SIZE])
        ]

        logger.info(
            "Previewed CSV with %d records, %d valid, mapping %s",
            len(records),
            len(validation.valid_records),
            mapping,
        )
        return CsvPreview(
            total_records=len(records),
            detected_columns=headers,
            column_mapping=mapping,
            sample_data=sample,
            valid_records=len(validation.valid_records),
            errors=validation.errors[:PREVIEW_ERROR_LIMIT],
        )

    def confirm_import(
        self,
        content: bytes | str,
        column_mapping: Mapping[str, str],
        actor_id: int | None = None,
    ) -> CsvImportSummary:
        """Create users for every valid row of a file.

        Rows whose employee ID already exists, in the database or earlier in
        the file, are skipped. Each user is created in its own savepoint so a
        failing row does not undo the others.

        Args:
            content: Raw CSV upload
            column_mapping: Field name to header, usually from ``preview``
            actor_id: ID of the admin running the import

        Returns:
            Import summary

        Raises:
            ValidationException: If the file is empty or has no valid rows
        """
        headers, records = parse_csv(content)
        mapping = {
            field_name: header
            for field_name, header in column_mapping.items()
            if field_name in IMPORT_FIELDS and header
        }

        validation = validate_records(records, mapping)
        if not validation.valid_records:
            raise ValidationException("No valid records to import")

        existing = self.user_service.existing_employee_ids()
        imported = 0
        skipped = 0
        import_errors: list[SkippedRecord] = []

        for record in validation.valid_records:
            if record.employee_id in existing:
                skipped += 1
                import_errors.append(
                    SkippedRecord(
                        employee_id=record.employee_id, error="Employee ID already exists"
                    )
                )
                continue

            try:
                with self.db.begin_nested():
                    self.user_service.create_user(
                        name=record.name,
                        employee_id=record.employee_id,
                        role=record.role,
                        nik=record.nik,
                        log_activity=False,
                    )
            except (SQLAlchemyError, ValidationException) as e:
                logger.warning("Failed to import %s: %s", record.employee_id, e)
                import_errors.append(SkippedRecord(employee_id=record.employee_id, error=str(e)))
                continue

            existing.add(record.employee_id)
            imported += 1

        self.activity_service.log(
            "csv_import",
            f"CSV Import: {imported} users imported, {skipped} skipped, "
            f"{len(validation.errors)} validation errors",
            actor_id,
        )
        logger.info("Imported %d users from CSV, skipped %d", imported, skipped)

        return CsvImportSummary(
            total_records=len(records),
            imported=imported,
            skipped=skipped,
            validation_errors=len(validation.errors),
            import_errors=import_errors[:IMPORT_ERROR_LIMIT],
        )
