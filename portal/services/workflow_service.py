"""Application status workflow for the admin application detail screen.

    PENDING -> UNDER_REVIEW -> INTERVIEW_SCHEDULED -> ACCEPTED | REJECTED

PENDING and UNDER_REVIEW can also be accepted or rejected directly. ACCEPTED
and REJECTED are terminal. Every action is one confirmed backend round trip
(two when the backend does not move the application status itself); the
cached application and interviews change only after the backend answers.

An application keeps a history of interviews: scheduling always creates a new
record, rescheduling updates the chosen one.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum

from portal.errors import FormValidationError, InvalidTransitionError, NotFoundError, PortalError
from portal.models.application import ApplicationStatus, JobApplication
from portal.models.interview import (
    Interview,
    InterviewResult,
    InterviewSchedule,
    InterviewStatus,
)
from portal.models.job import Job
from portal.services.api_client import ApiClient

logger = logging.getLogger(__name__)


class WorkflowAction(str, Enum):
    MARK_UNDER_REVIEW = "mark under review"
    SCHEDULE_INTERVIEW = "schedule an interview for"
    RESCHEDULE_INTERVIEW = "reschedule the interview of"
    RECORD_RESULT = "record an interview result for"
    ACCEPT = "accept"
    REJECT = "reject"


S = ApplicationStatus
A = WorkflowAction

# RECORD_RESULT maps to the status a SELECTED result leads to; see RESULT_STATUS.
TRANSITIONS: dict[ApplicationStatus, dict[WorkflowAction, ApplicationStatus]] = {
    S.PENDING: {
        A.MARK_UNDER_REVIEW: S.UNDER_REVIEW,
        A.ACCEPT: S.ACCEPTED,
        A.REJECT: S.REJECTED,
    },
    S.UNDER_REVIEW: {
        A.SCHEDULE_INTERVIEW: S.INTERVIEW_SCHEDULED,
        A.ACCEPT: S.ACCEPTED,
        A.REJECT: S.REJECTED,
    },
    S.INTERVIEW_SCHEDULED: {
        A.SCHEDULE_INTERVIEW: S.INTERVIEW_SCHEDULED,
        A.RESCHEDULE_INTERVIEW: S.INTERVIEW_SCHEDULED,
        A.RECORD_RESULT: S.ACCEPTED,
    },
    S.ACCEPTED: {},
    S.REJECTED: {},
}

RESULT_STATUS: dict[InterviewResult, ApplicationStatus] = {
    InterviewResult.SELECTED: S.ACCEPTED,
    InterviewResult.REJECTED: S.REJECTED,
    InterviewResult.WAITLISTED: S.INTERVIEW_SCHEDULED,
}

del S, A


def available_actions(status: ApplicationStatus) -> list[WorkflowAction]:
    return list(TRANSITIONS[status])


def next_status(status: ApplicationStatus, action: WorkflowAction) -> ApplicationStatus:
    try:
        return TRANSITIONS[status][action]
    except KeyError:
        raise InvalidTransitionError(action.value, status.value) from None


def validate_schedule(schedule: InterviewSchedule, now: datetime | None = None) -> datetime:
    """The interview's UTC start, or FormValidationError when it cannot be used."""
    if not schedule.date.strip() or not schedule.time.strip():
        raise FormValidationError("Please fill in all required fields")
    scheduled_at = schedule.scheduled_at()
    if scheduled_at is None:
        raise FormValidationError("Invalid date or time")
    if scheduled_at <= (now or datetime.now(timezone.utc)):
        raise FormValidationError("Interview must be scheduled in the future")
    return scheduled_at


class ApplicationWorkflow:
    def __init__(
        self,
        api: ApiClient,
        application: JobApplication,
        job: Job,
        interviews: list[Interview] | None = None,
        warnings: list[str] | None = None,
    ) -> None:
        self.api = api
        self.application = application
        self.job = job
        self.interviews = list(interviews or [])
        self.warnings = list(warnings or [])

    @classmethod
    async def load(cls, api: ApiClient, application_id: int) -> ApplicationWorkflow:
        application = await api.get_application(application_id)
        job = application.job
        if job is None:
            raise NotFoundError("Job")

        interviews: list[Interview] = []
        warnings: list[str] = []
        if application.user_id is not None:
            try:
                interviews = await api.get_application_interviews(application.user_id, application.id)
            except PortalError as e:
                # The application is still usable without its interviews
                logger.warning("Interviews for application %d unavailable: %s", application.id, e)
                warnings.append(e.message)
        return cls(api, application, job, interviews, warnings)

    @property
    def status(self) -> ApplicationStatus:
        return self.application.status

    def available_actions(self) -> list[WorkflowAction]:
        return available_actions(self.status)

    def _interview(self, interview_id: int) -> Interview:
        for interview in self.interviews:
            if interview.id == interview_id:
                return interview
        raise NotFoundError("Interview")

    def _replace_interview(self, updated: Interview) -> None:
        self.interviews = [updated if i.id == updated.id else i for i in self.interviews]

    def _set_status(self, status: ApplicationStatus) -> None:
        if status is not self.application.status:
            logger.info(
                "application %d: %s -> %s",
                self.application.id, self.application.status.value, status.value,
            )
        self.application = self.application.model_copy(update={"status": status})

    async def _change_status(self, action: WorkflowAction) -> ApplicationStatus:
        target = next_status(self.status, action)
        await self.api.change_application_status(self.application.id, target, self.job.title)
        self._set_status(target)
        return target

    async def _sync_status(self, target: ApplicationStatus, echoed: ApplicationStatus | None) -> None:
        """Make the backend status ``target`` unless its answer shows it already is."""
        if echoed is not target and self.status is not target:
            await self.api.change_application_status(self.application.id, target, self.job.title)
        self._set_status(target)

    async def mark_under_review(self) -> ApplicationStatus:
        return await self._change_status(WorkflowAction.MARK_UNDER_REVIEW)

    async def accept(self) -> ApplicationStatus:
        return await self._change_status(WorkflowAction.ACCEPT)

    async def reject(self) -> ApplicationStatus:
        return await self._change_status(WorkflowAction.REJECT)

    async def schedule_interview(
        self, schedule: InterviewSchedule, now: datetime | None = None
    ) -> Interview:
        target = next_status(self.status, WorkflowAction.SCHEDULE_INTERVIEW)
        validate_schedule(schedule, now)
        interview, echoed = await self.api.schedule_interview(self.application.id, schedule)
        self.interviews.append(interview)
        await self._sync_status(target, echoed)
        return interview

    async def reschedule_interview(
        self, interview_id: int, schedule: InterviewSchedule, now: datetime | None = None
    ) -> Interview:
        next_status(self.status, WorkflowAction.RESCHEDULE_INTERVIEW)
        current = self._interview(interview_id)
        if current.status is InterviewStatus.COMPLETED:
            raise FormValidationError("A completed interview cannot be rescheduled")
        validate_schedule(schedule, now)
        interview, _ = await self.api.reschedule_interview(interview_id, self.application.id, schedule)
        self._replace_interview(interview)
        return interview

    async def record_result(self, interview_id: int, result: InterviewResult) -> Interview:
        next_status(self.status, WorkflowAction.RECORD_RESULT)
        current = self._interview(interview_id)
        if current.status is not InterviewStatus.SCHEDULED:
            raise FormValidationError("Results can only be recorded for scheduled interviews")
        interview, echoed = await self.api.update_interview_result(interview_id, result)
        self._replace_interview(interview)
        await self._sync_status(RESULT_STATUS[result], echoed)
        return interview

    def snapshot(self) -> dict:
        return {
            "application": self.application.to_api(exclude={"job"}),
            "job": self.job.to_api(),
            "interviews": [i.to_api() for i in self.interviews],
            "actions": [action.name for action in self.available_actions()],
            "warnings": self.warnings,
        }
