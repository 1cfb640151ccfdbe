"""Upload ingestion: validate the submitted file part and derive its metadata."""

from upload_api.models.form import FileField, FormFields
from upload_api.models.upload import NO_FILE_UPLOADED, IngestResult, UploadMetadata, UploadValidationError


def derive_extension(filename: str) -> str:
    """Return the segment after the last dot, or the whole name when it has none."""
    return filename.split(".")[-1]


class UploadIngestor:
    """Turns the parsed fields of one request into upload metadata."""

    __slots__ = ("field",)

    def __init__(self, field: str = "file") -> None:
        self.field = field

    def __repr__(self) -> str:
        return f"UploadIngestor(field={self.field!r})"

    def ingest(self, fields: FormFields) -> IngestResult:
        """Return metadata for the file under ``self.field``, or a validation error.

        A missing field and a text value under the field are both reported
        as "No file uploaded".
        """
        match fields.get(self.field):
            case FileField(file=uploaded):
                return UploadMetadata(
                    filename=uploaded.name,
                    extension=derive_extension(uploaded.name),
                    mime_type=uploaded.media_type,
                )
            case _:
                return UploadValidationError(message=NO_FILE_UPLOADED)
