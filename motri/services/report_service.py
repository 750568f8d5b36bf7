# motri/services/report_service.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from sqlalchemy.orm import Session

from motri.core.errors import NotFound, ValidationError
from motri.models.report import AbuseType, Report
from motri.repositories.report_repo import create_report, delete_report, get_report, list_reports
from motri.utils.files import ImageStorage

log = logging.getLogger(__name__)

# Formularfeld -> Spalte (Reihenfolge = Reihenfolge im Formular)
REQUIRED_FIELDS: Dict[str, str] = {
    "name": "name",
    "email": "email",
    "phone": "phone",
    "abuseType": "abuse_type",
    "description": "description",
    "sex": "sex",
    "workPosition": "work_position",
    "educationLevel": "education_level",
    "jobType": "job_type",
    "incidentTime": "incident_time",
    "incidentPlace": "incident_place",
    "incidentDay": "incident_day",
}

ABUSE_TYPES = [t.value for t in AbuseType]


@dataclass
class ImageUpload:
    filename: str
    content_type: str
    data: bytes


def _clean_fields(fields: Mapping[str, Optional[str]]) -> Dict[str, str]:
    missing: List[str] = []
    values: Dict[str, str] = {}
    for wire_name, column in REQUIRED_FIELDS.items():
        raw = fields.get(wire_name)
        value = raw.strip() if isinstance(raw, str) else ""
        if not value:
            missing.append(wire_name)
        else:
            values[column] = value
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    if values["abuse_type"] not in ABUSE_TYPES:
        raise ValidationError(f"Invalid abuseType (allowed: {', '.join(ABUSE_TYPES)})")
    return values


def _check_image(image: ImageUpload, allowed_types: set[str], max_mb: int) -> None:
    content_type = (image.content_type or "").lower()
    if allowed_types and content_type not in allowed_types:
        raise ValidationError(
            f"Unsupported image type '{content_type}' (allowed: {', '.join(sorted(allowed_types))})"
        )
    if len(image.data) > max_mb * 1024 * 1024:
        raise ValidationError(f"Image too large (>{max_mb} MB)")


# --------------- Public API ---------------
def submit_report(
    db: Session,
    storage: ImageStorage,
    fields: Mapping[str, Optional[str]],
    image: Optional[ImageUpload] = None,
    *,
    allowed_image_types: set[str] = frozenset(),
    max_upload_mb: int = 10,
) -> Report:
    """
    Oeffentliche Meldung. Alle Felder ausser dem Bild sind Pflicht; bei einem
    Fehler wird nichts gespeichert.
    """
    values = _clean_fields(fields)

    if image is not None and image.data:
        _check_image(image, set(allowed_image_types), max_upload_mb)
        values["image"] = storage.save(image.data, image.content_type)
        log.info("Bild gespeichert: %s -> %s", image.filename, values["image"])

    try:
        report = create_report(db, **values)
    except Exception:
        db.rollback()
        storage.remove(values.get("image"))
        raise

    log.info("Report angelegt: id=%s abuse_type=%s", report.id, report.abuse_type)
    return report


def list_reports_for_director(
    db: Session,
    *,
    abuse_type: Optional[str] = None,
    search: Optional[str] = None,
) -> List[Report]:
    if abuse_type and abuse_type not in ABUSE_TYPES:
        raise ValidationError(f"Invalid abuseType (allowed: {', '.join(ABUSE_TYPES)})")
    return list_reports(db, abuse_type=abuse_type or None, search=(search or "").strip() or None)


def remove_report(db: Session, storage: ImageStorage, report_id: int) -> None:
    report = get_report(db, report_id)
    if report is None:
        raise NotFound("Report not found")

    image = report.image
    delete_report(db, report)
    if image:
        storage.remove(image)
    log.info("Report geloescht: id=%s", report_id)
