from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from shared.infrastructure.database import Base


class DocumentIndexModel(Base):
    __tablename__ = "document_index"

    owner_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    kind: Mapped[str] = mapped_column(String(20), nullable=False)
    current_content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    last_updated: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    auto_update_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    version_history: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    last_synced: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
