"""HTTP client for the careers REST backend.

All persistent state (users, jobs, applications, interviews) belongs to the
backend. Each method is one round trip; nothing is retried. Failures are
raised as the portal's error types so routers can show them unchanged.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any, TypeVar

import httpx
from pydantic import ValidationError

from portal.config import settings
from portal.errors import (
    BackendError,
    NetworkError,
    NotFoundError,
    UnauthorizedError,
    UnexpectedResponseError,
)
from portal.models.application import Application, ApplicationStatus, JobApplication
from portal.models.interview import Interview, InterviewResult, InterviewSchedule, InterviewStatus
from portal.models.job import Job, JobForm
from portal.models.user import Education, User
from portal.services.session_service import session_service

logger = logging.getLogger(__name__)

FETCHED = "fetched all Data"

T = TypeVar("T")


def _require_ok(payload: Any) -> Any:
    if not isinstance(payload, dict) or payload.get("success") != "ok" or not payload.get("response"):
        raise UnexpectedResponseError()
    return payload["response"]


def _require_fetched(payload: Any) -> Any:
    if not isinstance(payload, dict) or payload.get("message") != FETCHED or not payload.get("response"):
        raise UnexpectedResponseError()
    return payload["response"]


def _parse(parse: Callable[[Any], T], data: Any) -> T:
    """Build a model from a backend record; a malformed record is an unexpected response."""
    try:
        return parse(data)
    except (ValidationError, KeyError, TypeError, AttributeError) as e:
        logger.error("Malformed backend record: %s", e)
        raise UnexpectedResponseError() from e


def _parse_all(parse: Callable[[Any], T], items: Any) -> list[T]:
    if not isinstance(items, list):
        raise UnexpectedResponseError()
    return [_parse(parse, item) for item in items]


def _user_and_token(data: dict) -> tuple[User, str]:
    if not data.get("user") or not data.get("token"):
        raise UnexpectedResponseError()
    return User.model_validate(data["user"]), data["token"]


def _listed_interview(item: dict) -> Interview:
    """An admin list row; the embedded application supplies applicant and job names."""
    interview = Interview.model_validate(item)
    application = item.get("jobApplication") or {}
    if application:
        interview.applicant_name = (application.get("user") or {}).get("name")
        interview.job_title = (application.get("job") or {}).get("title")
    return interview


def _embedded_status(data: dict) -> ApplicationStatus | None:
    """Application status the backend echoed back alongside an interview, if any."""
    application = data.get("jobApplication")
    if not isinstance(application, dict):
        return None
    try:
        return ApplicationStatus(application.get("status"))
    except ValueError:
        return None


class ApiClient:
    def __init__(
        self,
        base_url: str | None = None,
        token_provider: Callable[[], str | None] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self._token_provider = token_provider or (lambda: None)
        self._transport = transport
        self._timeout = timeout if timeout is not None else settings.request_timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _headers(self) -> dict[str, str]:
        token = self._token_provider()
        return {settings.access_token_header: token} if token else {}

    async def _request(
        self,
        method: str,
        path: str,
        *,
        resource: str = "Resource",
        **kwargs: Any,
    ) -> Any:
        try:
            response = await self.client.request(method, path, headers=self._headers(), **kwargs)
        except httpx.RequestError as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise NetworkError() from e

        if response.status_code == 401:
            logger.warning("%s %s -> 401", method, path)
            raise UnauthorizedError()
        if response.status_code == 404:
            logger.warning("%s %s -> 404", method, path)
            raise NotFoundError(resource)
        if response.is_error:
            message = None
            try:
                message = response.json().get("message")
            except (ValueError, AttributeError):
                pass
            logger.warning("%s %s -> %d: %s", method, path, response.status_code, message)
            raise BackendError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            logger.error("%s %s returned a non-JSON body", method, path)
            raise UnexpectedResponseError() from e

    # Jobs

    async def list_jobs(self) -> list[Job]:
        payload = await self._request("GET", "/job", resource="Job")
        if not isinstance(payload, dict) or payload.get("success") != "ok":
            raise UnexpectedResponseError()
        return _parse_all(Job.model_validate, payload.get("response") or [])

    async def get_job(self, job_id: int) -> Job:
        payload = await self._request("GET", f"/job/{job_id}", resource="Job")
        return _parse(Job.model_validate, _require_ok(payload))

    async def create_job(self, form: JobForm) -> Job:
        payload = await self._request("POST", "/job", resource="Job", json=form.to_api())
        return _parse(Job.model_validate, _require_ok(payload))

    async def update_job(self, job_id: int, form: JobForm) -> Job:
        payload = await self._request("PUT", f"/job/{job_id}", resource="Job", json=form.to_api())
        return _parse(Job.model_validate, _require_ok(payload))

    async def delete_job(self, job_id: int) -> None:
        payload = await self._request("DELETE", f"/job/{job_id}", resource="Job")
        _require_ok(payload)

    # Users

    async def _authenticate(self, path: str, email: str, password: str) -> tuple[User, str]:
        payload = await self._request(
            "POST", path, resource="User", json={"email": email, "password": password}
        )
        return _parse(_user_and_token, _require_ok(payload))

    async def login(self, email: str, password: str) -> tuple[User, str]:
        return await self._authenticate("/user/login", email, password)

    async def admin_login(self, email: str, password: str) -> tuple[User, str]:
        return await self._authenticate("/admin/login", email, password)

    async def signup(
        self,
        basic_information: dict,
        education: list[Education],
        resume: tuple[str, bytes, str],
    ) -> tuple[User, str]:
        """Multipart signup: resume file plus two JSON-encoded form fields."""
        data = {
            "basicInformation": json.dumps(basic_information),
            "educationArray": json.dumps([edu.to_api() for edu in education]),
        }
        payload = await self._request(
            "POST", "/user", resource="User", data=data, files={"resume": resume}
        )
        return _parse(_user_and_token, _require_ok(payload))

    async def get_user_applications(self, user_id: int) -> list[Application]:
        payload = await self._request("GET", f"/user/{user_id}", resource="User")
        response = payload.get("response") if isinstance(payload, dict) else None
        if not isinstance(response, dict) or not isinstance(response.get("applications"), list):
            raise UnexpectedResponseError()
        return _parse_all(Application.model_validate, response["applications"])

    # Applications

    async def apply(self, job_id: int, cover_letter: str | None = None) -> Application:
        payload = await self._request(
            "POST",
            "/application",
            resource="Job",
            json={"jobId": job_id, "coverLetter": cover_letter},
        )
        return _parse(Application.model_validate, _require_ok(payload))

    async def list_applications(self) -> list[JobApplication]:
        payload = await self._request("GET", "/application", resource="Application")
        if not isinstance(payload, dict) or payload.get("success") != "ok":
            raise UnexpectedResponseError()
        return _parse_all(JobApplication.from_api, payload.get("response") or [])

    async def get_application(self, application_id: int) -> JobApplication:
        payload = await self._request(
            "GET", f"/application/apd/{application_id}", resource="Application"
        )
        data = _require_fetched(payload)
        if not isinstance(data, dict) or not data.get("user") or not data.get("job"):
            raise UnexpectedResponseError()
        return _parse(JobApplication.from_api, data)

    async def get_application_interviews(self, user_id: int, application_id: int) -> list[Interview]:
        """Interviews of one application, picked out of all of the applicant's applications.

        Raises NotFoundError when the application is not among the user's.
        """
        payload = await self._request(
            "GET", f"/application/interview/user/{user_id}", resource="Application"
        )
        if not isinstance(payload, dict) or payload.get("message") != FETCHED \
                or not isinstance(payload.get("response"), list):
            raise UnexpectedResponseError()
        for application in payload["response"]:
            if isinstance(application, dict) and application.get("id") == application_id:
                return _parse_all(Interview.model_validate, application.get("Interview") or [])
        raise NotFoundError("Application", "Application not found in user interviews")

    async def change_application_status(
        self, application_id: int, status: ApplicationStatus, job_title: str
    ) -> None:
        payload = await self._request(
            "PUT",
            f"/application/change-status/{application_id}",
            resource="Application",
            json={"applicationId": application_id, "status": status.value, "jobTitle": job_title},
        )
        _require_ok(payload)

    # Interviews

    def _interview_body(self, application_id: int, schedule: InterviewSchedule) -> dict:
        return {
            "interviewerName": schedule.interviewer_name,
            "interviewerEmail": schedule.interviewer_email,
            "interviewerPhone": schedule.interviewer_phone,
            "jobApplicationId": application_id,
            "modeOfInterview": schedule.mode_of_interview.value,
        }

    async def schedule_interview(
        self, application_id: int, schedule: InterviewSchedule
    ) -> tuple[Interview, ApplicationStatus | None]:
        body = self._interview_body(application_id, schedule)
        body["scheduleDate"] = _iso(schedule)
        payload = await self._request(
            "POST", "/application/schedule-interview/cutm", resource="Application", json=body
        )
        data = _require_ok(payload)
        return _parse(Interview.model_validate, data), _embedded_status(data)

    async def reschedule_interview(
        self, interview_id: int, application_id: int, schedule: InterviewSchedule
    ) -> tuple[Interview, ApplicationStatus | None]:
        body = self._interview_body(application_id, schedule)
        body["scheduledAt"] = _iso(schedule)
        body["status"] = InterviewStatus.SCHEDULED.value
        payload = await self._request(
            "PUT", f"/api/interview/{interview_id}", resource="Interview", json=body
        )
        data = _require_ok(payload)
        return _parse(Interview.model_validate, data), _embedded_status(data)

    async def update_interview_result(
        self, interview_id: int, result: InterviewResult
    ) -> tuple[Interview, ApplicationStatus | None]:
        payload = await self._request(
            "PUT",
            f"/application/interview-result/{interview_id}",
            resource="Interview",
            json={"status": result.value},
        )
        data = _require_ok(payload)
        if not isinstance(data, dict) or not data.get("updatedInterviewData"):
            raise UnexpectedResponseError()
        return _parse(Interview.model_validate, data["updatedInterviewData"]), _embedded_status(data)

    async def list_interviews(self) -> list[Interview]:
        payload = await self._request("GET", "/api/interview", resource="Interview")
        if not isinstance(payload, dict) or payload.get("success") != "ok":
            raise UnexpectedResponseError()
        return _parse_all(_listed_interview, payload.get("response") or [])


def _iso(schedule: InterviewSchedule) -> str | None:
    at = schedule.scheduled_at()
    return at.isoformat().replace("+00:00", "Z") if at else None


api_client = ApiClient(token_provider=lambda: session_service.token)
