from __future__ import annotations

import re
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, field_validator

from portal.models.base import CamelModel, coerce_enum


class InterviewStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"


class InterviewResult(str, Enum):
    SELECTED = "SELECTED"
    REJECTED = "REJECTED"
    WAITLISTED = "WAITLISTED"


class ModeOfInterview(str, Enum):
    ONLINE = "ONLINE"
    OFFLINE = "OFFLINE"


class Interview(CamelModel):
    id: int
    scheduled_at: datetime
    status: InterviewStatus = InterviewStatus.SCHEDULED
    job_application_id: int
    interviewer_name: str | None = None
    interviewer_email: str | None = None
    interviewer_phone: str | None = None
    mode_of_interview: ModeOfInterview = ModeOfInterview.ONLINE
    interview_result: InterviewResult | None = None
    created_at: str | None = None
    updated_at: str | None = None

    # Listing extras, filled when the backend embeds the application
    applicant_name: str | None = None
    job_title: str | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value):
        return coerce_enum(InterviewStatus, value, InterviewStatus.SCHEDULED)

    @field_validator("mode_of_interview", mode="before")
    @classmethod
    def _mode(cls, value):
        return coerce_enum(ModeOfInterview, value, ModeOfInterview.ONLINE)

    @field_validator("interview_result", mode="before")
    @classmethod
    def _result(cls, value):
        if value in ("", None):
            return None
        return coerce_enum(InterviewResult, value, InterviewResult.SELECTED)


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^\d{2}:\d{2}$")


class InterviewSchedule(BaseModel):
    """Interview form input. Date and time are interpreted as UTC."""

    date: str = ""
    time: str = ""
    interviewer_name: str = ""
    interviewer_email: str = ""
    interviewer_phone: str = ""
    mode_of_interview: ModeOfInterview = ModeOfInterview.ONLINE

    def scheduled_at(self) -> datetime | None:
        """Combined UTC timestamp, or None when date/time are missing or malformed."""
        if not _DATE_RE.match(self.date.strip()) or not _TIME_RE.match(self.time.strip()):
            return None
        try:
            naive = datetime.strptime(f"{self.date.strip()}T{self.time.strip()}", "%Y-%m-%dT%H:%M")
        except ValueError:
            return None
        return naive.replace(tzinfo=timezone.utc)

