"""The signed-in identity, with opt-in persistence ("remember me")."""
from __future__ import annotations

import logging

from pydantic import ValidationError

from portal.db import LocalStorage, local_storage
from portal.models.user import User

logger = logging.getLogger(__name__)

USER_KEY = "user"
TOKEN_KEY = "token"


class SessionService:
    def __init__(self, storage: LocalStorage | None = None) -> None:
        self._storage = storage or local_storage
        self._user: User | None = None
        self._token: str | None = None

    @property
    def user(self) -> User | None:
        return self._user

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None and bool(self._token)

    @property
    def is_admin(self) -> bool:
        return self.is_authenticated and self._user.is_admin

    def set_user(self, user: User, token: str, remember_me: bool = False) -> None:
        self._user = user
        self._token = token
        if remember_me:
            self._storage.set_item(USER_KEY, user.model_dump_json(by_alias=True))
            self._storage.set_item(TOKEN_KEY, token)
        logger.info("Signed in %s (%s, remembered=%s)", user.email, user.role.value, remember_me)

    def clear_user(self) -> None:
        self._user = None
        self._token = None
        self._storage.remove_item(USER_KEY)
        self._storage.remove_item(TOKEN_KEY)
        logger.info("Session cleared")

    def load_user_from_storage(self) -> None:
        raw_user = self._storage.get_item(USER_KEY)
        token = self._storage.get_item(TOKEN_KEY)
        if not raw_user or not token:
            return
        try:
            user = User.model_validate_json(raw_user)
        except ValidationError:
            logger.warning("Stored user is unreadable; ignoring it")
            return
        self._user = user
        self._token = token
        logger.debug("Session restored for %s", user.email)


session_service = SessionService()
