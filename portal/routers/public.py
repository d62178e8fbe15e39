"""Applicant-facing pages: home, job listing and details, applying, my applications."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from portal.models.job import JobStatus
from portal.models.notification import notify
from portal.models.user import User
from portal.routers.deps import current_user, get_api_client
from portal.services.api_client import ApiClient
from portal.services.filter_service import PUBLIC_JOB_TEXT, filter_items, unique_values

router = APIRouter(tags=["public"])


class ApplyRequest(BaseModel):
    cover_letter: str | None = None


@router.get("/")
async def home(api: ApiClient = Depends(get_api_client)) -> dict:
    jobs = await api.list_jobs()
    featured = [job for job in jobs if job.status is JobStatus.ACTIVE]
    return {"jobs": [job.to_api() for job in featured]}


@router.get("/jobs")
async def list_jobs(
    q: str = "",
    department: str = "",
    campus: str = "",
    job_type: str = "",
    api: ApiClient = Depends(get_api_client),
) -> dict:
    jobs = await api.list_jobs()
    filtered = filter_items(
        jobs, q, PUBLIC_JOB_TEXT, department=department, campus=campus, job_type=job_type
    )
    return {
        "jobs": [job.to_api() for job in filtered],
        "total": len(jobs),
        "filters": {
            "departments": unique_values(jobs, "department"),
            "campuses": unique_values(jobs, "campus"),
            "job_types": unique_values(jobs, "job_type"),
        },
    }


@router.get("/jobs/{job_id}")
async def job_details(job_id: int, api: ApiClient = Depends(get_api_client)) -> dict:
    job = await api.get_job(job_id)
    return {"job": job.to_api()}


@router.post("/jobs/{job_id}/apply")
async def apply(
    job_id: int,
    body: ApplyRequest | None = None,
    user: User = Depends(current_user),
    api: ApiClient = Depends(get_api_client),
) -> dict:
    application = await api.apply(job_id, body.cover_letter if body else None)
    return notify("Application submitted successfully!", application=application.to_api())


@router.get("/my-applications")
async def my_applications(
    user: User = Depends(current_user),
    api: ApiClient = Depends(get_api_client),
) -> dict:
    applications = await api.get_user_applications(user.id)
    return {"applications": [app.to_api() for app in applications]}
