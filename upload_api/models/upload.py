"""Upload ingestion outcomes."""

from pydantic import BaseModel, ConfigDict, Field

NO_FILE_UPLOADED = "No file uploaded"
UPLOAD_PROCESSING_FAILED = "Failed to process file upload"


class UploadMetadata(BaseModel):
    """Metadata derived from an uploaded file."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    filename: str
    extension: str
    mime_type: str = Field(alias="mimeType")


class UploadValidationError(BaseModel):
    """Client-caused rejection of an upload."""

    model_config = ConfigDict(frozen=True)

    message: str = NO_FILE_UPLOADED


type IngestResult = UploadMetadata | UploadValidationError
