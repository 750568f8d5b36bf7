# motri/repositories/report_repo.py
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select, func, or_, desc
from sqlalchemy.orm import Session

from motri.models.report import Report


# Suchfelder fuer das Dashboard-Suchfeld (Name, Telefon, Art des Vorfalls)
_SEARCH_COLUMNS = (Report.name, Report.phone, Report.abuse_type)


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def create_report(db: Session, **fields) -> Report:
    report = Report(**fields)
    db.add(report)
    db.commit()
    db.refresh(report)
    return report


def list_reports(
    db: Session,
    *,
    abuse_type: Optional[str] = None,
    search: Optional[str] = None,
) -> List[Report]:
    """
    Alle Reports, neueste zuerst.
    Gleiche Zeitstempel werden ueber die ID (absteigend) entschieden.
    """
    stmt = select(Report)
    if abuse_type:
        stmt = stmt.where(Report.abuse_type == abuse_type)
    if search:
        like = f"%{_escape_like(search.strip().lower())}%"
        stmt = stmt.where(or_(*[func.lower(col).like(like, escape="\\") for col in _SEARCH_COLUMNS]))
    stmt = stmt.order_by(desc(Report.created_at), desc(Report.id))
    return list(db.scalars(stmt).all())


def get_report(db: Session, report_id: int) -> Optional[Report]:
    return db.get(Report, report_id)


def delete_report(db: Session, report: Report) -> None:
    db.delete(report)
    db.commit()
