"""Admin dashboard figures, computed from the collections the backend returns."""
from __future__ import annotations

import asyncio

from pydantic import BaseModel

from portal.config import settings
from portal.models.application import ApplicationStatus, JobApplication
from portal.models.interview import Interview, InterviewStatus
from portal.models.job import Job, JobStatus
from portal.services.api_client import ApiClient


class DashboardMetrics(BaseModel):
    total_jobs: int = 0
    active_jobs: int = 0
    total_applications: int = 0
    pending_applications: int = 0
    scheduled_interviews: int = 0


def compute_metrics(
    jobs: list[Job], applications: list[JobApplication], interviews: list[Interview]
) -> DashboardMetrics:
    return DashboardMetrics(
        total_jobs=len(jobs),
        active_jobs=sum(1 for job in jobs if job.status is JobStatus.ACTIVE),
        total_applications=len(applications),
        pending_applications=sum(
            1 for app in applications if app.status is ApplicationStatus.PENDING
        ),
        scheduled_interviews=sum(
            1 for interview in interviews if interview.status is InterviewStatus.SCHEDULED
        ),
    )


def recent_applications(
    applications: list[JobApplication], limit: int | None = None
) -> list[JobApplication]:
    limit = limit if limit is not None else settings.recent_applications_limit
    ordered = sorted(applications, key=lambda app: app.created_at or "", reverse=True)
    return ordered[:limit]


async def load_dashboard(api: ApiClient) -> dict:
    jobs, applications, interviews = await asyncio.gather(
        api.list_jobs(), api.list_applications(), api.list_interviews()
    )
    return {
        "metrics": compute_metrics(jobs, applications, interviews).model_dump(),
        "recent_applications": [
            {**app.to_api(exclude={"job"}), "jobTitle": app.job_title,
             "campus": app.job.campus if app.job else ""}
            for app in recent_applications(applications)
        ],
    }
