from datetime import datetime

from pydantic import BaseModel, Field

from documents.application.services import SyncStatus
from documents.domain.entities import DocumentKind, Materialization


class VersionResponse(BaseModel):
    id: str
    timestamp: datetime
    label: str
    content: str


class DocumentSummaryResponse(BaseModel):
    id: str
    title: str
    kind: DocumentKind
    owner_id: str
    last_updated: datetime
    auto_update_enabled: bool
    materialization: Materialization
    version_count: int


class DocumentResponse(BaseModel):
    id: str
    title: str
    kind: DocumentKind
    owner_id: str
    current_content: str
    last_updated: datetime
    auto_update_enabled: bool
    materialization: Materialization
    versions: list[VersionResponse]


class DocumentChangeResponse(BaseModel):
    document: DocumentResponse
    sync_status: SyncStatus
    edits_used: int | None = None


class ImportDocumentRequest(BaseModel):
    title: str = Field(min_length=1)
    kind: DocumentKind
    content: str = ""


class EditDocumentRequest(BaseModel):
    content: str
    is_auto_save: bool = False


class RestoreVersionRequest(BaseModel):
    version_id: str
