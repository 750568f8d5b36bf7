# motri/schemas/report.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ReportOut(BaseModel):
    # JSON in camelCase wie im Formular (abuseType, workPosition, ...)
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: int
    name: str
    email: str
    phone: str
    abuse_type: str
    description: str
    sex: str
    work_position: str
    education_level: str
    job_type: str
    incident_time: str
    incident_place: str
    incident_day: str
    image: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class ReportCreatedOut(BaseModel):
    success: bool = True
    data: ReportOut
