# motri/models/report.py
from __future__ import annotations

import enum
from datetime import datetime
from typing import Optional

from sqlalchemy import Integer, String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from motri.db.database import Base
from motri.utils.dates import now_utc


class AbuseType(str, enum.Enum):
    PHYSICAL = "Physical"
    EMOTIONAL = "Emotional"
    SEXUAL = "Sexual"
    FINANCIAL = "Financial"
    OTHER = "Other"


class Report(Base):
    __tablename__ = "reports"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # ------------------------------------------------------------
    # Kontakt
    # ------------------------------------------------------------
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(64), nullable=False)

    # ------------------------------------------------------------
    # Vorfall
    # ------------------------------------------------------------
    abuse_type: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    incident_time: Mapped[str] = mapped_column(String(64), nullable=False)
    incident_place: Mapped[str] = mapped_column(String(255), nullable=False)
    incident_day: Mapped[str] = mapped_column(String(64), nullable=False)

    # ------------------------------------------------------------
    # Person / Arbeitsplatz
    # ------------------------------------------------------------
    sex: Mapped[str] = mapped_column(String(32), nullable=False)
    work_position: Mapped[str] = mapped_column(String(64), nullable=False)
    education_level: Mapped[str] = mapped_column(String(64), nullable=False)
    job_type: Mapped[str] = mapped_column(String(64), nullable=False)

    # Relativer Pfad unter /uploads (optional)
    image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=now_utc,
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=now_utc,
    )

    def __repr__(self) -> str:
        return f"<Report id={self.id} abuse_type={self.abuse_type!r} created_at={self.created_at}>"
