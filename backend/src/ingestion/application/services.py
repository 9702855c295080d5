"""Turn uploaded or imported files into new documents.

Binary office formats are not parsed; they get placeholder text instead.
"""

from datetime import datetime
from pathlib import PurePath

from documents.domain.entities import Document, DocumentKind
from documents.domain.versioning import new_document
from shared.exceptions import PolicyViolationError

ACCEPTED_EXTENSIONS = frozenset({"doc", "docx", "txt", "xls", "xlsx", "csv", "md", "json"})
BINARY_EXTENSIONS = frozenset({"doc", "docx", "xls", "xlsx"})
SHEET_EXTENSIONS = frozenset({"xls", "xlsx", "csv"})
TEXT_EXTENSIONS = frozenset({"txt", "md", "json"})


def file_extension(filename: str) -> str:
    return PurePath(filename).suffix.lstrip(".").lower()


def sniff_kind(filename: str) -> DocumentKind:
    extension = file_extension(filename)
    if extension in SHEET_EXTENSIONS:
        return DocumentKind.SHEET
    if extension in TEXT_EXTENSIONS:
        return DocumentKind.TEXT
    return DocumentKind.DOC


def placeholder_text(filename: str) -> str:
    extension = file_extension(filename).upper()
    return (
        f"[Binary content extracted from {filename}]\n\n"
        f"Text extraction is not available for {extension} files.\n"
        f"This placeholder stands in for the content of the uploaded {extension} file."
    )


def ingest_upload(
    owner_id: str, filename: str, data: bytes, now: datetime | None = None
) -> Document:
    extension = file_extension(filename)
    if extension not in ACCEPTED_EXTENSIONS:
        raise PolicyViolationError(
            f"Unsupported file type '.{extension}'; accepted: "
            + ", ".join(f".{e}" for e in sorted(ACCEPTED_EXTENSIONS))
        )

    if extension in BINARY_EXTENSIONS:
        content = placeholder_text(filename)
    else:
        content = data.decode("utf-8", errors="replace")

    return new_document(owner_id, filename, sniff_kind(filename), content, now=now)


def ingest_import(
    owner_id: str,
    title: str,
    kind: DocumentKind,
    content: str,
    now: datetime | None = None,
) -> Document:
    """Documents imported from a connected drive keep syncing automatically."""
    return new_document(owner_id, title, kind, content, auto_update_enabled=True, now=now)
