"""Login, logout and the signup wizard."""
from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, UploadFile

from portal.models.notification import notify
from portal.models.user import Education, LoginRequest, PersonalInfoUpdate
from portal.routers.deps import get_auth_service, get_session, get_signup_wizard
from portal.services.auth_service import AuthService
from portal.services.session_service import SessionService
from portal.services.signup_service import ResumeFile, SignupWizard

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
async def login(body: LoginRequest, auth: AuthService = Depends(get_auth_service)) -> dict:
    user = await auth.login(body.email, body.password, body.remember_me)
    return notify("Successfully logged in!", user=user.to_api())


@router.post("/admin/login")
async def admin_login(body: LoginRequest, auth: AuthService = Depends(get_auth_service)) -> dict:
    user = await auth.login(body.email, body.password, body.remember_me, admin=True)
    return notify("Successfully logged in!", user=user.to_api())


@router.post("/logout")
async def logout(auth: AuthService = Depends(get_auth_service)) -> dict:
    auth.logout()
    return notify("Logged out")


@router.get("/me")
async def me(session: SessionService = Depends(get_session)) -> dict:
    user = session.user
    return {
        "user": user.to_api() if user else None,
        "is_admin": session.is_admin,
    }


# Signup wizard


@router.get("/signup")
async def signup_state(wizard: SignupWizard = Depends(get_signup_wizard)) -> dict:
    return wizard.status()


@router.delete("/signup")
async def discard_signup(wizard: SignupWizard = Depends(get_signup_wizard)) -> dict:
    wizard.discard()
    return notify("Signup discarded", level="info", **wizard.status())


@router.put("/signup/personal-info")
async def update_personal_info(
    body: PersonalInfoUpdate, wizard: SignupWizard = Depends(get_signup_wizard)
) -> dict:
    wizard.update_personal_info(body)
    return wizard.status()


@router.post("/signup/education")
async def add_education(wizard: SignupWizard = Depends(get_signup_wizard)) -> dict:
    wizard.add_education()
    return wizard.status()


@router.put("/signup/education/{index}")
async def update_education(
    index: int, body: Education, wizard: SignupWizard = Depends(get_signup_wizard)
) -> dict:
    wizard.update_education(index, body)
    return wizard.status()


@router.delete("/signup/education/{index}")
async def remove_education(index: int, wizard: SignupWizard = Depends(get_signup_wizard)) -> dict:
    wizard.remove_education(index)
    return wizard.status()


@router.post("/signup/next")
async def next_step(wizard: SignupWizard = Depends(get_signup_wizard)) -> dict:
    wizard.next_step()
    return wizard.status()


@router.post("/signup/back")
async def previous_step(wizard: SignupWizard = Depends(get_signup_wizard)) -> dict:
    wizard.previous_step()
    return wizard.status()


@router.post("/signup/submit")
async def submit_signup(
    resume: UploadFile | None = File(None),
    agree_terms: bool = Form(False),
    wizard: SignupWizard = Depends(get_signup_wizard),
) -> dict:
    if resume is not None:
        wizard.attach_resume(
            ResumeFile(
                filename=resume.filename or "resume",
                content=await resume.read(),
                content_type=resume.content_type or "application/octet-stream",
            )
        )
    wizard.set_agree_terms(agree_terms)
    user = await wizard.submit()
    return notify("Successfully signed up!", user=user.to_api())
