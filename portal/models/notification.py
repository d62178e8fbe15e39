from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel


class Notification(BaseModel):
    level: Literal["success", "info", "warning", "error"] = "info"
    message: str


def notify(message: str, level: str = "success", **data: Any) -> dict:
    """Response body for a mutation: a notification plus whatever the view needs."""
    return {"notification": Notification(level=level, message=message).model_dump(), **data}
