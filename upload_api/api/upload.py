"""File upload metadata endpoint."""

from robyn import Response, status_codes

from upload_api.core.logger import LogIcon, logger
from upload_api.core.router import Router, json_response
from upload_api.models.core import ErrorResponse
from upload_api.models.form import FormFields
from upload_api.models.upload import UPLOAD_PROCESSING_FAILED, UploadMetadata, UploadValidationError
from upload_api.services.ingestor import UploadIngestor

router = Router(__file__)


def handle_upload(ingestor: UploadIngestor | None, form: FormFields) -> Response:
    """Run the ingestor over a parsed form and map its outcome to a reply."""
    try:
        outcome = ingestor.ingest(form)
    except Exception:
        logger.exception("Failed to process file upload", icon=LogIcon.ERROR)
        return json_response(
            ErrorResponse(error=UPLOAD_PROCESSING_FAILED),
            status_code=status_codes.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    match outcome:
        case UploadMetadata():
            logger.info(
                "File upload accepted",
                icon=LogIcon.UPLOAD,
                filename=outcome.filename,
                mime_type=outcome.mime_type,
            )
            return json_response(outcome)
        case UploadValidationError(message=message):
            logger.warning("File upload rejected", icon=LogIcon.VALIDATION, reason=message, fields=list(form))
            return json_response(ErrorResponse(error=message), status_code=status_codes.HTTP_400_BAD_REQUEST)


@router.post("/upload")
async def upload(form: FormFields, global_dependencies) -> Response:
    """Upload a file and get its name, extension and declared media type."""
    return handle_upload(global_dependencies["state"].get("ingestor"), form)
