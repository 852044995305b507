"""
Document conversion (file -> HTML markup).

- .docx files go through mammoth, which keeps table structure and
  writes merged cells as rowspan/colspan attributes
- .html/.htm files are already markup and are read as-is

Every failure is reported as ConversionError so the importer can stop
before any grid work starts.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import mammoth

from mytimetable.errors import ConversionError


SUPPORTED_EXTENSIONS = {".docx", ".html", ".htm"}


@dataclass(frozen=True)
class ConvertedDocument:
    markup: str


def _validate_path(path: str | Path) -> Path:
    p = Path(path)

    if not p.exists():
        raise ConversionError(f"File not found: {p}")

    if not p.is_file():
        raise ConversionError(f"Path is not a file: {p}")

    if p.suffix.lower() not in SUPPORTED_EXTENSIONS:
        raise ConversionError(
            f"Unsupported file format: {p.suffix or '(none)'}. "
            f"Supported formats: {', '.join(sorted(SUPPORTED_EXTENSIONS))}"
        )

    return p


def convert_document(path: str | Path) -> ConvertedDocument:
    """
    Convert a timetable document into markup text.
    """
    p = _validate_path(path)

    if p.suffix.lower() in (".html", ".htm"):
        try:
            return ConvertedDocument(markup=p.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise ConversionError(f"Could not read {p.name}: {e}") from e

    try:
        with p.open("rb") as fh:
            result = mammoth.convert_to_html(fh)
    except Exception as e:
        # mammoth raises a mix of zipfile/KeyError/ValueError for broken files
        raise ConversionError(f"Could not convert {p.name}: {e}") from e

    return ConvertedDocument(markup=result.value)
