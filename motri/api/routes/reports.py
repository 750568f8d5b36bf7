# motri/api/routes/reports.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.orm import Session

from motri.api.deps import CurrentDirector, get_current_director, get_image_storage, get_settings
from motri.core.config import Settings
from motri.db.database import get_db
from motri.schemas.auth import MessageOut
from motri.schemas.report import ReportCreatedOut, ReportOut
from motri.services.report_service import (
    ImageUpload,
    list_reports_for_director,
    remove_report,
    submit_report,
)
from motri.utils.files import ImageStorage

router = APIRouter(prefix="/api/reports", tags=["reports"])


# ------------------------------------------------------------
# Oeffentlich: Meldung abschicken (multipart)
# ------------------------------------------------------------
@router.post("", response_model=ReportCreatedOut, status_code=201, openapi_extra={"security": []})
async def create_report(
    name: Optional[str] = Form(default=None),
    email: Optional[str] = Form(default=None),
    phone: Optional[str] = Form(default=None),
    abuse_type: Optional[str] = Form(default=None, alias="abuseType"),
    description: Optional[str] = Form(default=None),
    sex: Optional[str] = Form(default=None),
    work_position: Optional[str] = Form(default=None, alias="workPosition"),
    education_level: Optional[str] = Form(default=None, alias="educationLevel"),
    job_type: Optional[str] = Form(default=None, alias="jobType"),
    incident_time: Optional[str] = Form(default=None, alias="incidentTime"),
    incident_place: Optional[str] = Form(default=None, alias="incidentPlace"),
    incident_day: Optional[str] = Form(default=None, alias="incidentDay"),
    image: Optional[UploadFile] = File(default=None),
    db: Session = Depends(get_db),
    storage: ImageStorage = Depends(get_image_storage),
    settings: Settings = Depends(get_settings),
):
    upload = None
    if image is not None and image.filename:
        upload = ImageUpload(
            filename=image.filename,
            content_type=image.content_type or "",
            data=await image.read(),
        )

    fields = {
        "name": name,
        "email": email,
        "phone": phone,
        "abuseType": abuse_type,
        "description": description,
        "sex": sex,
        "workPosition": work_position,
        "educationLevel": education_level,
        "jobType": job_type,
        "incidentTime": incident_time,
        "incidentPlace": incident_place,
        "incidentDay": incident_day,
    }
    report = submit_report(
        db,
        storage,
        fields,
        upload,
        allowed_image_types=settings.allowed_image_types,
        max_upload_mb=settings.MAX_UPLOAD_MB,
    )
    return {"success": True, "data": ReportOut.model_validate(report)}


# ------------------------------------------------------------
# Nur Director
# ------------------------------------------------------------
@router.get("", response_model=List[ReportOut])
def get_reports(
    abuse_type: Optional[str] = Query(default=None, alias="abuseType"),
    search: Optional[str] = Query(default=None),
    director: CurrentDirector = Depends(get_current_director),
    db: Session = Depends(get_db),
):
    return list_reports_for_director(db, abuse_type=abuse_type, search=search)


@router.delete("/{report_id}", response_model=MessageOut)
def delete_report(
    report_id: int,
    director: CurrentDirector = Depends(get_current_director),
    db: Session = Depends(get_db),
    storage: ImageStorage = Depends(get_image_storage),
):
    remove_report(db, storage, report_id)
    return {"message": "Report deleted successfully"}
