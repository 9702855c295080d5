from datetime import datetime

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from shared.infrastructure.database import Base


class AccountModel(Base):
    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    tier: Mapped[str] = mapped_column(String(20), nullable=False, server_default="base")
    edits_used: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    last_edit_reset: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    auto_update_interval_days: Mapped[int] = mapped_column(Integer, nullable=False, server_default="14")
    updated_at: Mapped[datetime] = mapped_column(server_default=func.now(), onupdate=func.now())
