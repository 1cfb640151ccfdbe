"""Form fields a request handler receives, text or file."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UploadedFile:
    """One submitted file part. Never mutated once parsed."""

    name: str
    media_type: str = ""
    size: int = 0


@dataclass(frozen=True, slots=True)
class TextField:
    """Plain text form value."""

    value: str


@dataclass(frozen=True, slots=True)
class FileField:
    """File form value."""

    file: UploadedFile


type FormValue = TextField | FileField


class FormFields(Mapping[str, FormValue]):
    """Read-only mapping of field name to its first submitted value."""

    __slots__ = ("_fields",)

    def __init__(self, fields: dict[str, FormValue] | None = None) -> None:
        self._fields = dict(fields or {})

    def __getitem__(self, name: str) -> FormValue:
        return self._fields[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"FormFields({self._fields})"

    def files(self) -> dict[str, UploadedFile]:
        """Get file parts by field name."""
        return {name: value.file for name, value in self._fields.items() if isinstance(value, FileField)}
