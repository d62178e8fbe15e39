"""Shared FastAPI dependencies: services, the signed-in user, the admin gate."""
from __future__ import annotations

from fastapi import Depends

from portal.errors import ForbiddenError, UnauthorizedError
from portal.models.user import User
from portal.services.api_client import ApiClient, api_client
from portal.services.auth_service import AuthService
from portal.services.session_service import SessionService, session_service
from portal.services.signup_service import SignupWizard, signup_wizard


def get_api_client() -> ApiClient:
    return api_client


def get_session() -> SessionService:
    return session_service


def get_auth_service(
    api: ApiClient = Depends(get_api_client),
    session: SessionService = Depends(get_session),
) -> AuthService:
    return AuthService(api, session)


def get_signup_wizard() -> SignupWizard:
    if not signup_wizard.restored:
        signup_wizard.restore()
    return signup_wizard


def current_user(session: SessionService = Depends(get_session)) -> User:
    if not session.is_authenticated:
        raise UnauthorizedError("Please log in to continue")
    return session.user


def require_admin(user: User = Depends(current_user)) -> User:
    if not user.is_admin:
        raise ForbiddenError()
    return user
