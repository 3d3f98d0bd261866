"""Admin CSV user import API endpoints."""

import json
import logging
from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, request
from spectree import Response as SpectreeResponse
from werkzeug.exceptions import RequestEntityTooLarge

from app.config import Settings
from app.exceptions import ValidationException
from app.schemas.csv_import import (
    CsvImportResponseSchema,
    CsvImportSummarySchema,
    CsvPreviewResponseSchema,
    CsvPreviewSchema,
)
from app.schemas.error import ErrorResponseSchema
from app.services.container import ServiceContainer
from app.services.csv_import_service import CsvImportService
from app.utils.auth import get_actor_id
from app.utils.error_handling import handle_api_errors
from app.utils.spectree_config import api

logger = logging.getLogger(__name__)

csv_import_bp = Blueprint("csv_import", __name__, url_prefix="/users/import")

UPLOAD_FIELD = "csvFile"


def _read_upload(max_bytes: int) -> bytes:
    """Read the uploaded CSV file from the multipart form.

    Raises:
        ValidationException: If the file is missing, not a CSV or too large
    """
    limit_message = f"CSV file must not exceed {max_bytes // (1024 * 1024)}MB"
    try:
        files = request.files
    except RequestEntityTooLarge as e:
        raise ValidationException(limit_message) from e

    if UPLOAD_FIELD not in files:
        raise ValidationException("No file uploaded")

    uploaded_file = files[UPLOAD_FIELD]
    filename = uploaded_file.filename or ""
    if not filename.lower().endswith(".csv"):
        raise ValidationException("Only CSV files are allowed")

    content = uploaded_file.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise ValidationException(limit_message)

    logger.info("Received CSV upload '%s' (%d bytes)", filename, len(content))
    return content


@csv_import_bp.route("/preview", methods=["POST"])
@api.validate(
    resp=SpectreeResponse(
        HTTP_200=CsvPreviewResponseSchema,
        HTTP_400=ErrorResponseSchema,
    )
)
@handle_api_errors
@inject
def preview_import(
    csv_import_service: CsvImportService = Provide[ServiceContainer.csv_import_service],
    config: Settings = Provide[ServiceContainer.config],
) -> Any:
    """Parse an uploaded CSV and report the detected mapping and problems.

    Form fields:
        csvFile: The CSV file
    """
    content = _read_upload(config.csv_max_upload_bytes)
    preview = csv_import_service.preview(content)

    return CsvPreviewResponseSchema(
        message="CSV parsed successfully",
        data=CsvPreviewSchema.from_preview(preview),
    ).model_dump(mode="json", by_alias=True)


@csv_import_bp.route("/confirm", methods=["POST"])
@api.validate(
    resp=SpectreeResponse(
        HTTP_200=CsvImportResponseSchema,
        HTTP_400=ErrorResponseSchema,
    )
)
@handle_api_errors
@inject
def confirm_import(
    csv_import_service: CsvImportService = Provide[ServiceContainer.csv_import_service],
    config: Settings = Provide[ServiceContainer.config],
) -> Any:
    """Import the valid rows of an uploaded CSV.

    Form fields:
        csvFile: The CSV file
        columnMapping: JSON object mapping user fields to CSV headers
    """
    content = _read_upload(config.csv_max_upload_bytes)

    raw_mapping = request.form.get("columnMapping", "")
    try:
        column_mapping = json.loads(raw_mapping) if raw_mapping else None
    except json.JSONDecodeError as e:
        raise ValidationException("columnMapping must be valid JSON") from e
    if not isinstance(column_mapping, dict):
        raise ValidationException("Column mapping is required")

    summary = csv_import_service.confirm_import(
        content,
        {str(k): str(v) for k, v in column_mapping.items() if v},
        actor_id=get_actor_id(),
    )

    return CsvImportResponseSchema(
        message=f"Import completed: {summary.imported} users imported",
        data=CsvImportSummarySchema.from_summary(summary),
    ).model_dump(mode="json", by_alias=True)
