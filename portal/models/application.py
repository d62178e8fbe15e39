from __future__ import annotations

from enum import Enum

from pydantic import field_validator

from portal.models.base import CamelModel, coerce_enum
from portal.models.job import Job


class ApplicationStatus(str, Enum):
    PENDING = "PENDING"
    UNDER_REVIEW = "UNDER_REVIEW"
    INTERVIEW_SCHEDULED = "INTERVIEW_SCHEDULED"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


def _coerce_status(value) -> ApplicationStatus:
    if value is None:
        return ApplicationStatus.PENDING
    return coerce_enum(ApplicationStatus, value, ApplicationStatus.PENDING)


class Application(CamelModel):
    """A row of the applicant's own "My Applications" list."""

    id: int
    cover_letter: str | None = None
    status: ApplicationStatus = ApplicationStatus.PENDING
    applied_at: str | None = None
    updated_at: str | None = None
    user_id: int | None = None
    job_id: int
    job: Job | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value):
        return _coerce_status(value)


class JobApplication(CamelModel):
    """An application as the admin screens see it, applicant details flattened in."""

    id: int
    job_id: int
    user_id: int | None = None
    applicant_name: str = ""
    applicant_email: str = ""
    applicant_phone: str = ""
    resume_url: str = ""
    status: ApplicationStatus = ApplicationStatus.PENDING
    created_at: str | None = None
    updated_at: str | None = None
    submitted_at: str | None = None
    job: Job | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value):
        return _coerce_status(value)

    @property
    def job_title(self) -> str:
        return self.job.title if self.job else ""

    @classmethod
    def from_api(cls, data: dict) -> JobApplication:
        """Flatten the backend's ``{..., user: {...}, job: {...}}`` shape."""
        user = data.get("user") or {}
        job = data.get("job") or None
        return cls(
            id=data["id"],
            job_id=data.get("jobId") or (job or {}).get("id"),
            user_id=user.get("id") or data.get("userId"),
            applicant_name=user.get("name") or data.get("applicantName") or "",
            applicant_email=user.get("email") or data.get("applicantEmail") or "",
            applicant_phone=user.get("phoneNumber") or data.get("applicantPhone") or "",
            resume_url=user.get("resumeUrl") or data.get("resumeURL") or "",
            status=data.get("status"),
            created_at=data.get("appliedAt") or data.get("createdAt"),
            updated_at=data.get("updatedAt"),
            submitted_at=data.get("submittedAt"),
            job=Job.model_validate(job) if job else None,
        )
