"""Login and logout on top of the API client and the session holder."""
from __future__ import annotations

import logging

from portal.errors import FormValidationError
from portal.models.user import User
from portal.services.api_client import ApiClient
from portal.services.session_service import SessionService

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, api: ApiClient, session: SessionService) -> None:
        self.api = api
        self.session = session

    async def login(
        self, email: str, password: str, remember_me: bool = False, admin: bool = False
    ) -> User:
        if not email.strip() or not password.strip():
            raise FormValidationError("Email and password are required")
        if admin:
            user, token = await self.api.admin_login(email.strip(), password)
        else:
            user, token = await self.api.login(email.strip(), password)
        self.session.set_user(user, token, remember_me=remember_me)
        return user

    def logout(self) -> None:
        self.session.clear_user()
