from .application import Application, ApplicationStatus, JobApplication
from .interview import (
    Interview,
    InterviewResult,
    InterviewSchedule,
    InterviewStatus,
    ModeOfInterview,
)
from .job import Job, JobForm, JobStatus, JobType
from .notification import Notification, notify
from .user import Education, LoginRequest, PersonalInfoUpdate, Role, SignupForm, User

__all__ = [
    "Application",
    "ApplicationStatus",
    "JobApplication",
    "Interview",
    "InterviewResult",
    "InterviewSchedule",
    "InterviewStatus",
    "ModeOfInterview",
    "Job",
    "JobForm",
    "JobStatus",
    "JobType",
    "Notification",
    "notify",
    "Education",
    "LoginRequest",
    "PersonalInfoUpdate",
    "Role",
    "SignupForm",
    "User",
]
