"""Three-step signup wizard with a locally persisted draft.

Steps: 1 personal info, 2 education, 3 resume and terms. Moving forward is
gated on the current step being complete; moving back is always allowed and
keeps what was entered. Every change is saved as a draft that expires after
``settings.signup_draft_ttl`` seconds, so an interrupted signup can resume.
The password and the resume file are never written to the draft.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from pydantic import ValidationError

from portal.config import settings
from portal.errors import FormValidationError
from portal.models.user import Education, PersonalInfoUpdate, SignupForm, User
from portal.services.api_client import ApiClient, api_client
from portal.services.draft_service import DraftService, draft_service
from portal.services.session_service import SessionService, session_service

logger = logging.getLogger(__name__)

FIRST_STEP = 1
LAST_STEP = 3


@dataclass
class ResumeFile:
    filename: str
    content: bytes
    content_type: str = "application/pdf"


class SignupWizard:
    def __init__(
        self,
        api: ApiClient,
        session: SessionService,
        drafts: DraftService,
        draft_key: str | None = None,
        ttl: int | None = None,
    ) -> None:
        self.api = api
        self.session = session
        self.drafts = drafts
        self.draft_key = draft_key or settings.signup_draft_key
        self.ttl = ttl if ttl is not None else settings.signup_draft_ttl
        self.form = SignupForm()
        self.resume: ResumeFile | None = None
        self.restored = False

    @property
    def step(self) -> int:
        return self.form.step

    def restore(self) -> SignupForm:
        saved = self.drafts.load_draft(self.draft_key)
        if saved:
            try:
                self.form = SignupForm.model_validate(saved)
            except ValidationError:
                logger.warning("Signup draft is unreadable; starting over")
                self.form = SignupForm()
        self.form.step = min(max(self.form.step, FIRST_STEP), LAST_STEP)
        self.restored = True
        return self.form

    def _persist(self) -> None:
        self.drafts.save_draft(self.draft_key, self.form.to_api(exclude={"password"}), self.ttl)

    def discard(self) -> None:
        self.form = SignupForm()
        self.resume = None
        self.drafts.clear_draft(self.draft_key)

    # Editing

    def update_personal_info(self, update: PersonalInfoUpdate) -> None:
        for field, value in update.model_dump(exclude_none=True).items():
            setattr(self.form, field, value)
        self._persist()

    def _education_at(self, index: int) -> Education:
        if not 0 <= index < len(self.form.education):
            raise FormValidationError(f"No education entry at position {index}")
        return self.form.education[index]

    def update_education(self, index: int, entry: Education) -> None:
        self._education_at(index)
        self.form.education[index] = entry
        self._persist()

    def add_education(self) -> None:
        self.form.education.append(Education())
        self._persist()

    def remove_education(self, index: int) -> None:
        self._education_at(index)
        if len(self.form.education) == 1:
            raise FormValidationError("At least one education entry is required")
        del self.form.education[index]
        self._persist()

    def set_agree_terms(self, agreed: bool) -> None:
        self.form.agree_terms = agreed
        self._persist()

    def attach_resume(self, resume: ResumeFile) -> None:
        self.resume = resume

    # Gates

    def is_personal_info_valid(self) -> bool:
        f = self.form
        return all(
            value.strip()
            for value in (f.name, f.email, f.password, f.phone_number, f.experience)
        )

    def is_education_valid(self) -> bool:
        return all(entry.is_complete() for entry in self.form.education)

    def is_ready_to_submit(self) -> bool:
        return self.resume is not None and self.form.agree_terms

    def can_advance(self) -> bool:
        if self.step == 1:
            return self.is_personal_info_valid()
        if self.step == 2:
            return self.is_education_valid()
        return False

    def next_step(self) -> int:
        if self.step >= LAST_STEP:
            raise FormValidationError("Already on the last step")
        if not self.can_advance():
            if self.step == 1:
                raise FormValidationError("Please fill in all personal information fields")
            raise FormValidationError("Please complete every education entry")
        self.form.step += 1
        self._persist()
        return self.step

    def previous_step(self) -> int:
        if self.step <= FIRST_STEP:
            raise FormValidationError("Already on the first step")
        self.form.step -= 1
        self._persist()
        return self.step

    def status(self) -> dict:
        return {
            "step": self.step,
            "form": self.form.to_api(exclude={"password"}),
            "has_password": bool(self.form.password.strip()),
            "has_resume": self.resume is not None,
            "personal_info_valid": self.is_personal_info_valid(),
            "education_valid": self.is_education_valid(),
            "can_advance": self.can_advance(),
            "ready_to_submit": self.step == LAST_STEP and self.is_ready_to_submit(),
        }

    async def submit(self) -> User:
        if self.step != LAST_STEP:
            raise FormValidationError("Complete the previous steps first")
        if self.resume is None:
            raise FormValidationError("Please upload your resume")
        if not self.form.agree_terms:
            raise FormValidationError("Please accept the terms and conditions")
        # A restored draft has no password, so re-check the earlier gates
        if not self.is_personal_info_valid() or not self.is_education_valid():
            raise FormValidationError("Please fill in all required fields")

        user, token = await self.api.signup(
            self.form.basic_information(),
            self.form.education,
            (self.resume.filename, self.resume.content, self.resume.content_type),
        )
        self.session.set_user(user, token, remember_me=True)
        self.discard()
        logger.info("Signed up %s", user.email)
        return user


signup_wizard = SignupWizard(api_client, session_service, draft_service)
