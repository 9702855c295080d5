from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from shared.exceptions import MaterializationRequiredError


class DocumentKind(StrEnum):
    SHEET = "sheet"
    DOC = "doc"
    TEXT = "text"


class Materialization(StrEnum):
    FULL = "full"
    LIVE_ONLY = "live_only"  # live content loaded, version bodies not
    LITE = "lite"


@dataclass(frozen=True)
class Version:
    id: str
    timestamp: datetime
    content: str
    label: str


@dataclass
class Document:
    id: str
    title: str
    kind: DocumentKind
    owner_id: str
    current_content: str
    last_updated: datetime
    versions: list[Version] = field(default_factory=list)
    auto_update_enabled: bool = False
    materialization: Materialization = Materialization.FULL

    @property
    def is_lite(self) -> bool:
        return self.materialization == Materialization.LITE

    @property
    def has_history(self) -> bool:
        """Whether version bodies are loaded and may be read, restored or rewritten."""
        return self.materialization == Materialization.FULL

    @property
    def content(self) -> str:
        """Live content; unavailable on lite documents."""
        if self.is_lite:
            raise MaterializationRequiredError(self.id)
        return self.current_content

    def find_version(self, version_id: str) -> Version | None:
        return next((v for v in self.versions if v.id == version_id), None)
