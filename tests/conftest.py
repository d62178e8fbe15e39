from __future__ import annotations

import json

import duckdb
import httpx
import pytest
from fastapi.testclient import TestClient

from portal.db import LocalStorage
from portal.services.api_client import ApiClient
from portal.services.draft_service import DraftService
from portal.services.session_service import SessionService
from portal.services.signup_service import SignupWizard

BASE_URL = "http://backend.test"
FETCHED = "fetched all Data"

# Job list of the first public jobs page prototype
PROTOTYPE_JOBS = [
    {"id": 1, "title": "Junior Research Fellow (JRF)", "department": "Computer Science",
     "location": "Bhubaneswar Campus", "type": "Full-time", "deadline": "June 30, 2025"},
    {"id": 2, "title": "Assistant Professor", "department": "Mechanical Engineering",
     "location": "Paralakhemundi Campus", "type": "Full-time", "deadline": "July 15, 2025"},
    {"id": 3, "title": "Lab Assistant", "department": "Biotechnology",
     "location": "Vizianagaram Campus", "type": "Part-time", "deadline": "June 25, 2025"},
    {"id": 4, "title": "Research Associate", "department": "Physics",
     "location": "Bhubaneswar Campus", "type": "Full-time", "deadline": "July 20, 2025"},
    {"id": 5, "title": "Teaching Assistant", "department": "Mathematics",
     "location": "Paralakhemundi Campus", "type": "Part-time", "deadline": "June 28, 2025"},
    {"id": 6, "title": "Senior Professor", "department": "Chemistry",
     "location": "Vizianagaram Campus", "type": "Full-time", "deadline": "July 10, 2025"},
    {"id": 7, "title": "Research Scientist", "department": "Biotechnology",
     "location": "Bhubaneswar Campus", "type": "Full-time", "deadline": "July 25, 2025"},
    {"id": 8, "title": "Administrative Assistant", "department": "Administration",
     "location": "Paralakhemundi Campus", "type": "Part-time", "deadline": "June 22, 2025"},
    {"id": 9, "title": "Librarian", "department": "Library Science",
     "location": "Vizianagaram Campus", "type": "Full-time", "deadline": "July 5, 2025"},
]


def job_payload(id: int = 1, title: str = "Assistant Professor", **overrides) -> dict:
    return {
        "id": id,
        "title": title,
        "description": "Teach undergraduate courses and supervise projects.",
        "companyName": "Centurion University",
        "campus": "Bhubaneswar Campus",
        "department": "Computer Science",
        "Qualification": "PhD in Computer Science",
        "salaryRange": "₹8,00,000 - ₹12,00,000 per annum",
        "imageURL": None,
        "jobType": "FULL_TIME",
        "status": "ACTIVE",
        "adminId": 1,
        "applicationDeadline": "2030-06-30",
        "createdAt": "2025-05-01T10:00:00Z",
        "updatedAt": "2025-05-01T10:00:00Z",
        **overrides,
    }


def user_payload(id: int = 3, role: str = "USER", **overrides) -> dict:
    return {
        "id": id,
        "name": "Priya Patel",
        "email": "priya.patel@example.com",
        "phoneNumber": "+91 9876543211",
        "role": role,
        "exprience": "2 years",
        "resumeUrl": "https://example.com/resumes/priya_patel.pdf",
        "createdAt": "2025-04-01T09:00:00Z",
        "updatedAt": "2025-04-01T09:00:00Z",
        **overrides,
    }


def application_payload(id: int = 7, status: str = "UNDER_REVIEW", user_id: int = 3, **overrides) -> dict:
    return {
        "id": id,
        "jobId": 1,
        "status": status,
        "appliedAt": "2025-05-02T08:15:00Z",
        "updatedAt": "2025-05-03T11:30:00Z",
        "submittedAt": None,
        "user": user_payload(id=user_id),
        "job": job_payload(),
        **overrides,
    }


def interview_payload(
    id: int = 11,
    application_id: int = 7,
    status: str = "SCHEDULED",
    result: str | None = None,
    scheduled_at: str = "2030-01-15T10:30:00.000Z",
    **overrides,
) -> dict:
    return {
        "id": id,
        "scheduledAt": scheduled_at,
        "status": status,
        "jobApplicationId": application_id,
        "interviewerName": "Dr. Mohanty",
        "interviewerEmail": "mohanty@cutm.ac.in",
        "interviewerPhone": "+91 9000000000",
        "modeOfInterview": "ONLINE",
        "interviewResult": result,
        "createdAt": "2025-05-04T10:00:00Z",
        "updatedAt": "2025-05-04T10:00:00Z",
        **overrides,
    }


def ok(response) -> dict:
    return {"success": "ok", "response": response}


def fetched(response) -> dict:
    return {"message": FETCHED, "response": response}


class FakeBackend:
    """Answers (method, path) with canned JSON and records every request."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, object]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, body: object = None, status: int = 200) -> None:
        self.routes[(method, path)] = (status, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={"message": "Not found"})
        status, body = self.routes[key]
        if callable(body):
            body = body(request)
        if isinstance(body, Exception):
            raise body
        return httpx.Response(status, json=body)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def json_of(self, method: str, path: str, index: int = -1) -> dict:
        return json.loads(self.calls(method, path)[index].content)


class FakeClock:
    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def storage():
    con = duckdb.connect()
    yield LocalStorage(con)
    con.close()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def drafts(storage, clock):
    return DraftService(storage, clock=clock)


@pytest.fixture
def session(storage):
    return SessionService(storage)


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def api(backend, session):
    return ApiClient(
        base_url=BASE_URL,
        token_provider=lambda: session.token,
        transport=httpx.MockTransport(backend.handler),
    )


@pytest.fixture
def wizard(api, session, drafts):
    wizard = SignupWizard(api, session, drafts)
    wizard.restore()
    return wizard


@pytest.fixture
def client(api, session, wizard):
    from portal.main import app
    from portal.routers.deps import get_api_client, get_session, get_signup_wizard

    app.dependency_overrides[get_api_client] = lambda: api
    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[get_signup_wizard] = lambda: wizard
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_session(session):
    from portal.models.user import User

    session.set_user(User.model_validate(user_payload(id=1, role="ADMIN", name="Admin")), "admin-token")
    return session
