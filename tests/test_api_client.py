import asyncio

import httpx
import pytest

from portal.errors import (
    BackendError,
    NetworkError,
    NotFoundError,
    UnauthorizedError,
    UnexpectedResponseError,
)
from portal.models.application import ApplicationStatus
from portal.models.interview import InterviewResult, InterviewSchedule, InterviewStatus, ModeOfInterview
from portal.models.job import JobForm, JobStatus, JobType
from portal.models.user import Role, User

from conftest import (
    application_payload,
    fetched,
    interview_payload,
    job_payload,
    ok,
    user_payload,
)


def run(coro):
    return asyncio.run(coro)


def test_list_jobs_parses_backend_shape(api, backend):
    backend.add("GET", "/job", ok([job_payload(), job_payload(id=2, jobType="PART_TIME", status="CLOSED")]))

    jobs = run(api.list_jobs())

    assert [job.id for job in jobs] == [1, 2]
    assert jobs[0].qualification == "PhD in Computer Science"
    assert jobs[1].job_type is JobType.PART_TIME
    assert jobs[1].status is JobStatus.CLOSED


def test_empty_job_list_is_not_an_error(api, backend):
    backend.add("GET", "/job", {"success": "ok", "response": []})

    assert run(api.list_jobs()) == []


def test_unknown_enum_values_fall_back_to_defaults(api, backend):
    backend.add("GET", "/job/1", ok(job_payload(jobType="APPRENTICESHIP", status=None)))

    job = run(api.get_job(1))

    assert job.job_type is JobType.FULL_TIME
    assert job.status is JobStatus.ACTIVE


def test_token_is_sent_in_the_access_token_header(api, backend, session):
    backend.add("GET", "/job", ok([]))
    session.set_user(User.model_validate(user_payload()), "tok-42")

    run(api.list_jobs())

    assert backend.requests[-1].headers["x-access-token"] == "tok-42"


def test_no_header_without_a_session(api, backend):
    backend.add("GET", "/job", ok([]))

    run(api.list_jobs())

    assert "x-access-token" not in backend.requests[-1].headers


@pytest.mark.parametrize(
    "status, body, error",
    [
        (401, {"message": "jwt expired"}, UnauthorizedError),
        (404, {"message": "nope"}, NotFoundError),
        (500, {"message": "Database down"}, BackendError),
    ],
)
def test_error_statuses_map_to_portal_errors(api, backend, status, body, error):
    backend.add("GET", "/job/5", body, status=status)

    with pytest.raises(error):
        run(api.get_job(5))


def test_backend_message_is_passed_through(api, backend):
    backend.add("POST", "/application", {"message": "You already applied"}, status=400)

    with pytest.raises(BackendError) as excinfo:
        run(api.apply(1))

    assert excinfo.value.message == "You already applied"
    assert excinfo.value.status_code == 400


def test_not_found_names_the_resource(api, backend):
    with pytest.raises(NotFoundError) as excinfo:
        run(api.get_job(99))

    assert excinfo.value.message == "Job not found"


def test_unreachable_backend_is_a_network_error(api, backend):
    backend.add("GET", "/job", lambda request: httpx.ConnectError("refused", request=request))

    with pytest.raises(NetworkError) as excinfo:
        run(api.list_jobs())

    assert "Unable to reach the server" in excinfo.value.message


def test_wrong_envelope_is_an_unexpected_response(api, backend):
    backend.add("GET", "/job/1", {"success": "no", "response": job_payload()})

    with pytest.raises(UnexpectedResponseError):
        run(api.get_job(1))


def test_create_job_sends_camel_case_form(api, backend):
    backend.add("POST", "/job", ok(job_payload(id=5, title="Librarian")))
    form = JobForm(
        title="Librarian",
        description="Manage the central library.",
        campus="Vizianagaram Campus",
        department="Library Science",
        qualification="MLIS",
        application_deadline="2030-07-05",
    )

    job = run(api.create_job(form))

    assert job.id == 5
    sent = backend.json_of("POST", "/job")
    assert sent["Qualification"] == "MLIS"
    assert sent["companyName"] == "Centurion University"
    assert sent["applicationDeadline"] == "2030-07-05"
    assert sent["jobType"] == "FULL_TIME"


def test_blank_required_job_field_is_rejected():
    with pytest.raises(ValueError):
        JobForm(
            title="  ",
            description="x",
            campus="x",
            department="x",
            qualification="x",
            application_deadline="2030-01-01",
        )


def test_login_returns_user_and_token(api, backend):
    backend.add("POST", "/user/login", ok({"user": user_payload(), "token": "tok"}))

    user, token = run(api.login("priya.patel@example.com", "pw"))

    assert user.experience == "2 years"
    assert user.role is Role.APPLICANT
    assert token == "tok"
    assert backend.json_of("POST", "/user/login") == {
        "email": "priya.patel@example.com",
        "password": "pw",
    }


def test_login_without_token_is_unexpected(api, backend):
    backend.add("POST", "/admin/login", ok({"user": user_payload(role="ADMIN")}))

    with pytest.raises(UnexpectedResponseError):
        run(api.admin_login("admin@cutm.ac.in", "pw"))


def test_user_applications(api, backend):
    backend.add(
        "GET",
        "/user/3",
        {"response": {**user_payload(), "applications": [
            {"id": 7, "jobId": 1, "status": "PENDING", "appliedAt": "2025-05-02T08:15:00Z",
             "job": job_payload()},
        ]}},
    )

    applications = run(api.get_user_applications(3))

    assert applications[0].status is ApplicationStatus.PENDING
    assert applications[0].job.title == "Assistant Professor"


def test_get_application_flattens_applicant(api, backend):
    backend.add("GET", "/application/apd/7", fetched(application_payload()))

    application = run(api.get_application(7))

    assert application.applicant_name == "Priya Patel"
    assert application.user_id == 3
    assert application.job_title == "Assistant Professor"
    assert application.status is ApplicationStatus.UNDER_REVIEW


def test_application_interviews_are_picked_by_application(api, backend):
    backend.add(
        "GET",
        "/application/interview/user/3",
        fetched([
            {"id": 6, "Interview": [interview_payload(id=1, application_id=6)]},
            {"id": 7, "Interview": [interview_payload(id=11), interview_payload(id=12)]},
        ]),
    )

    interviews = run(api.get_application_interviews(3, 7))

    assert [i.id for i in interviews] == [11, 12]

    with pytest.raises(NotFoundError, match="Application not found in user interviews"):
        run(api.get_application_interviews(3, 8))


def test_change_status_uses_put(api, backend):
    backend.add("PUT", "/application/change-status/7", ok({"id": 7, "status": "ACCEPTED"}))

    run(api.change_application_status(7, ApplicationStatus.ACCEPTED, "Assistant Professor"))

    assert backend.json_of("PUT", "/application/change-status/7") == {
        "applicationId": 7,
        "status": "ACCEPTED",
        "jobTitle": "Assistant Professor",
    }


def test_schedule_interview_sends_utc_timestamp(api, backend):
    backend.add(
        "POST",
        "/application/schedule-interview/cutm",
        ok({**interview_payload(id=12), "jobApplication": {"status": "INTERVIEW_SCHEDULED"}}),
    )
    schedule = InterviewSchedule(
        date="2030-01-15",
        time="10:30",
        interviewer_name="Dr. Mohanty",
        interviewer_email="mohanty@cutm.ac.in",
        mode_of_interview=ModeOfInterview.OFFLINE,
    )

    interview, echoed = run(api.schedule_interview(7, schedule))

    assert interview.id == 12
    assert echoed is ApplicationStatus.INTERVIEW_SCHEDULED
    sent = backend.json_of("POST", "/application/schedule-interview/cutm")
    assert sent["scheduleDate"] == "2030-01-15T10:30:00Z"
    assert sent["jobApplicationId"] == 7
    assert sent["modeOfInterview"] == "OFFLINE"


def test_interview_result_update(api, backend):
    backend.add(
        "PUT",
        "/application/interview-result/11",
        ok({"updatedInterviewData": interview_payload(status="COMPLETED", result="SELECTED")}),
    )

    interview, echoed = run(api.update_interview_result(11, InterviewResult.SELECTED))

    assert interview.status is InterviewStatus.COMPLETED
    assert interview.interview_result is InterviewResult.SELECTED
    assert echoed is None
    assert backend.json_of("PUT", "/application/interview-result/11") == {"status": "SELECTED"}


def test_list_interviews_fills_listing_extras(api, backend):
    backend.add("GET", "/api/interview", ok([
        {**interview_payload(), "jobApplication": {
            "user": {"name": "Priya Patel"}, "job": {"title": "Assistant Professor"},
        }},
        interview_payload(id=12),
    ]))

    interviews = run(api.list_interviews())

    assert interviews[0].applicant_name == "Priya Patel"
    assert interviews[0].job_title == "Assistant Professor"
    assert interviews[1].applicant_name is None


@pytest.mark.parametrize(
    "record",
    [
        job_payload(title=None),
        {k: v for k, v in job_payload().items() if k != "title"},
        job_payload(id=None),
        "not a job",
    ],
)
def test_malformed_job_record_is_an_unexpected_response(api, backend, record):
    backend.add("GET", "/job", ok([record]))

    with pytest.raises(UnexpectedResponseError):
        run(api.list_jobs())


def test_application_without_id_is_an_unexpected_response(api, backend):
    record = {k: v for k, v in application_payload().items() if k != "id"}
    backend.add("GET", "/application", ok([record]))

    with pytest.raises(UnexpectedResponseError):
        run(api.list_applications())


def test_malformed_single_records_are_unexpected_responses(api, backend):
    backend.add("GET", "/job/1", ok(job_payload(title=None)))
    backend.add("GET", "/application/apd/7", fetched(application_payload(job=["oops"])))
    backend.add("POST", "/user/login", ok({"user": {"name": "No Id"}, "token": "tok"}))
    backend.add("PUT", "/application/interview-result/11",
                ok({"updatedInterviewData": interview_payload(scheduled_at="whenever")}))

    with pytest.raises(UnexpectedResponseError):
        run(api.get_job(1))
    with pytest.raises(UnexpectedResponseError):
        run(api.get_application(7))
    with pytest.raises(UnexpectedResponseError):
        run(api.login("priya.patel@example.com", "pw"))
    with pytest.raises(UnexpectedResponseError):
        run(api.update_interview_result(11, InterviewResult.SELECTED))


def test_update_job_puts_the_form(api, backend):
    backend.add("PUT", "/job/1", ok(job_payload(title="Associate Professor", status="CLOSED")))
    form = JobForm(
        title="Associate Professor",
        description="Lead the systems group.",
        campus="Bhubaneswar Campus",
        department="Computer Science",
        qualification="PhD",
        application_deadline="2030-08-01",
        status=JobStatus.CLOSED,
    )

    job = run(api.update_job(1, form))

    assert job.title == "Associate Professor"
    assert job.status is JobStatus.CLOSED
    sent = backend.json_of("PUT", "/job/1")
    assert sent["title"] == "Associate Professor"
    assert sent["status"] == "CLOSED"
    assert sent["Qualification"] == "PhD"
