"""Form fields built from the parts Robyn parses out of a request."""

import mimetypes
from collections.abc import Mapping
from typing import Any

from robyn import Request

from upload_api.models.form import FileField, FormFields, FormValue, TextField, UploadedFile

DEFAULT_MEDIA_TYPE = "application/octet-stream"
TEXT_MEDIA_TYPE = "text/plain"


class FormParseError(Exception):
    """Raised when form parts cannot be turned into fields."""


def _to_bytes(content: Any) -> bytes:
    match content:
        case bytes():
            return content
        case bytearray() | memoryview():
            return bytes(content)
        case str():
            return content.encode("utf-8")
        case list() if all(isinstance(item, int) for item in content):
            return bytes(content)
        case _:
            raise FormParseError(f"Unsupported file payload: {type(content).__name__}")


def guess_media_type(filename: str, content: bytes) -> str:
    """Resolve a file's media type from its name, then from its content.

    Names with no known extension are ``text/plain`` when the content is
    non-empty UTF-8, and ``application/octet-stream`` otherwise.
    """
    guessed, _ = mimetypes.guess_type(filename, strict=False)
    if guessed:
        return guessed
    if not content:
        return DEFAULT_MEDIA_TYPE
    try:
        content.decode("utf-8")
    except UnicodeDecodeError:
        return DEFAULT_MEDIA_TYPE
    return TEXT_MEDIA_TYPE


def build_form(
    form_data: Mapping[str, Any] | None,
    files: Mapping[str, Any] | None,
    file_field: str,
) -> FormFields:
    """Assemble form fields from Robyn's ``form_data`` and ``files``.

    Robyn keys uploaded files by filename and drops the field name of the
    part, so the first file is filed under ``file_field``. A text part
    already holding that name keeps it.
    """
    fields: dict[str, FormValue] = {}

    for name, value in (form_data or {}).items():
        if not isinstance(value, str):
            raise FormParseError(f"Form field '{name}' is not text: {type(value).__name__}")
        fields[name] = TextField(value=value)

    first_file = next(iter((files or {}).items()), None)
    if first_file is not None and file_field not in fields:
        filename, content = first_file
        payload = _to_bytes(content)
        fields[file_field] = FileField(
            file=UploadedFile(
                name=filename,
                media_type=guess_media_type(filename, payload),
                size=len(payload),
            )
        )

    return FormFields(fields)


def parse_form(request: Request, file_field: str) -> FormFields:
    """Read the form parts of a Robyn request into fields."""
    return build_form(request.form_data, request.files, file_field)
