from pydantic import TypeAdapter

from documents.domain.entities import Document

_document_adapter = TypeAdapter(Document)


def document_to_dict(document: Document) -> dict:
    return _document_adapter.dump_python(document, mode="json")


def document_from_dict(data: dict) -> Document:
    return _document_adapter.validate_python(data)


def document_to_json(document: Document) -> bytes:
    return _document_adapter.dump_json(document)


def document_from_json(payload: bytes | str) -> Document:
    return _document_adapter.validate_json(payload)
