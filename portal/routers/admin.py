"""Admin panel: dashboard, job postings, applications, interviews."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from portal.models.interview import InterviewResult, InterviewSchedule
from portal.models.job import JobForm
from portal.models.notification import notify
from portal.routers.deps import get_api_client, require_admin
from portal.services.api_client import ApiClient
from portal.services.dashboard_service import load_dashboard
from portal.services.filter_service import (
    ADMIN_JOB_TEXT,
    APPLICATION_TEXT,
    INTERVIEW_TEXT,
    filter_items,
)
from portal.services.workflow_service import ApplicationWorkflow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


class ResultRequest(BaseModel):
    result: InterviewResult


@router.get("")
async def dashboard(api: ApiClient = Depends(get_api_client)) -> dict:
    return await load_dashboard(api)


@router.get("/settings")
async def settings_page() -> dict:
    return {"title": "Settings", "message": "Settings page coming soon"}


# Jobs


@router.get("/jobs")
async def list_jobs(
    q: str = "",
    status: str = "",
    job_type: str = "",
    api: ApiClient = Depends(get_api_client),
) -> dict:
    jobs = await api.list_jobs()
    filtered = filter_items(jobs, q, ADMIN_JOB_TEXT, status=status, job_type=job_type)
    return {"jobs": [job.to_api() for job in filtered], "total": len(jobs)}


@router.post("/jobs", status_code=201)
async def create_job(form: JobForm, api: ApiClient = Depends(get_api_client)) -> dict:
    job = await api.create_job(form)
    logger.info("Created job %d: %s", job.id, job.title)
    return notify("Job created successfully!", job=job.to_api())


@router.get("/jobs/{job_id}")
async def job_detail(job_id: int, api: ApiClient = Depends(get_api_client)) -> dict:
    job = await api.get_job(job_id)
    applications = [app for app in await api.list_applications() if app.job_id == job_id]
    return {
        "job": job.to_api(),
        "applications": [app.to_api(exclude={"job"}) for app in applications],
    }


@router.put("/jobs/{job_id}")
async def update_job(job_id: int, form: JobForm, api: ApiClient = Depends(get_api_client)) -> dict:
    job = await api.update_job(job_id, form)
    return notify("Job updated successfully!", job=job.to_api())


@router.delete("/jobs/{job_id}")
async def delete_job(job_id: int, api: ApiClient = Depends(get_api_client)) -> dict:
    await api.delete_job(job_id)
    logger.info("Deleted job %d", job_id)
    return notify("Job deleted successfully!")


# Applications


@router.get("/applications")
async def list_applications(
    q: str = "",
    status: str = "",
    api: ApiClient = Depends(get_api_client),
) -> dict:
    applications = await api.list_applications()
    filtered = filter_items(applications, q, APPLICATION_TEXT, status=status)
    return {
        "applications": [
            {**app.to_api(exclude={"job"}), "jobTitle": app.job_title} for app in filtered
        ],
        "total": len(applications),
    }


@router.get("/applications/{application_id}")
async def application_detail(
    application_id: int, api: ApiClient = Depends(get_api_client)
) -> dict:
    workflow = await ApplicationWorkflow.load(api, application_id)
    return workflow.snapshot()


@router.post("/applications/{application_id}/review")
async def mark_under_review(application_id: int, api: ApiClient = Depends(get_api_client)) -> dict:
    workflow = await ApplicationWorkflow.load(api, application_id)
    await workflow.mark_under_review()
    return notify("Application status updated successfully!", **workflow.snapshot())


@router.post("/applications/{application_id}/accept")
async def accept(application_id: int, api: ApiClient = Depends(get_api_client)) -> dict:
    workflow = await ApplicationWorkflow.load(api, application_id)
    await workflow.accept()
    return notify("Application status updated successfully!", **workflow.snapshot())


@router.post("/applications/{application_id}/reject")
async def reject(application_id: int, api: ApiClient = Depends(get_api_client)) -> dict:
    workflow = await ApplicationWorkflow.load(api, application_id)
    await workflow.reject()
    return notify("Application status updated successfully!", **workflow.snapshot())


@router.post("/applications/{application_id}/interviews", status_code=201)
async def schedule_interview(
    application_id: int,
    schedule: InterviewSchedule,
    api: ApiClient = Depends(get_api_client),
) -> dict:
    workflow = await ApplicationWorkflow.load(api, application_id)
    await workflow.schedule_interview(schedule)
    return notify("Interview scheduled successfully!", **workflow.snapshot())


@router.put("/applications/{application_id}/interviews/{interview_id}")
async def reschedule_interview(
    application_id: int,
    interview_id: int,
    schedule: InterviewSchedule,
    api: ApiClient = Depends(get_api_client),
) -> dict:
    workflow = await ApplicationWorkflow.load(api, application_id)
    await workflow.reschedule_interview(interview_id, schedule)
    return notify("Interview rescheduled successfully!", **workflow.snapshot())


@router.put("/applications/{application_id}/interviews/{interview_id}/result")
async def record_result(
    application_id: int,
    interview_id: int,
    body: ResultRequest,
    api: ApiClient = Depends(get_api_client),
) -> dict:
    workflow = await ApplicationWorkflow.load(api, application_id)
    await workflow.record_result(interview_id, body.result)
    return notify("Interview result updated successfully!", **workflow.snapshot())


# Interviews


@router.get("/interviews")
async def list_interviews(
    q: str = "",
    status: str = "",
    mode: str = "",
    api: ApiClient = Depends(get_api_client),
) -> dict:
    interviews = await api.list_interviews()
    filtered = filter_items(interviews, q, INTERVIEW_TEXT, status=status, mode_of_interview=mode)
    return {"interviews": [i.to_api() for i in filtered], "total": len(interviews)}
