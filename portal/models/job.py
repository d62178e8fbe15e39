from __future__ import annotations

from enum import Enum

from pydantic import Field, field_validator

from portal.config import settings
from portal.models.base import CamelModel, coerce_enum


class JobType(str, Enum):
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    CONTRACT = "CONTRACT"
    INTERNSHIP = "INTERNSHIP"
    REMOTE = "REMOTE"


class JobStatus(str, Enum):
    ACTIVE = "ACTIVE"
    CLOSED = "CLOSED"


class Job(CamelModel):
    id: int
    title: str
    description: str = ""
    company_name: str = ""
    campus: str = ""
    department: str = ""
    qualification: str = Field("", alias="Qualification")
    salary_range: str | None = None
    image_url: str | None = Field(None, alias="imageURL")
    job_type: JobType = JobType.FULL_TIME
    status: JobStatus = JobStatus.ACTIVE
    admin_id: int | None = None
    application_deadline: str = ""
    created_at: str | None = None
    updated_at: str | None = None

    @field_validator(
        "description", "company_name", "campus", "department", "qualification",
        "application_deadline", mode="before",
    )
    @classmethod
    def _blank(cls, value):
        return "" if value is None else value

    @field_validator("job_type", mode="before")
    @classmethod
    def _job_type(cls, value):
        return coerce_enum(JobType, value, JobType.FULL_TIME) or JobType.FULL_TIME

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value):
        return coerce_enum(JobStatus, value, JobStatus.ACTIVE) or JobStatus.ACTIVE


class JobForm(CamelModel):
    """Create/update payload from the admin job form."""

    title: str
    description: str
    company_name: str = settings.default_company_name
    campus: str
    department: str
    qualification: str = Field(alias="Qualification")
    salary_range: str = ""
    image_url: str = Field("", alias="imageURL")
    job_type: JobType = JobType.FULL_TIME
    status: JobStatus = JobStatus.ACTIVE
    application_deadline: str

    @field_validator(
        "title", "description", "campus", "department", "qualification",
        "application_deadline",
    )
    @classmethod
    def _required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("field is required")
        return value
