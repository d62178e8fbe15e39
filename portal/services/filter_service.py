"""Client-side filtering over collections already fetched from the backend.

A free-text query matches when it is a case-insensitive substring of any of
the text fields. Each selector must equal the item's field; an empty selector
matches everything. All predicates are ANDed and input order is kept.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import Enum
from typing import Any, TypeVar

T = TypeVar("T")

PUBLIC_JOB_TEXT = ("title", "department")
ADMIN_JOB_TEXT = ("title", "description", "campus")
APPLICATION_TEXT = ("applicant_name", "applicant_email", "job_title")
INTERVIEW_TEXT = ("applicant_name", "job_title", "interviewer_name")


def _field(item: Any, name: str) -> Any:
    value = item.get(name) if isinstance(item, dict) else getattr(item, name, None)
    return value.value if isinstance(value, Enum) else value


def _selector(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def matches(item: Any, query: str = "", text_fields: Sequence[str] = (), **selectors: Any) -> bool:
    needle = (query or "").strip().lower()
    if needle and not any(
        needle in str(_field(item, name) or "").lower() for name in text_fields
    ):
        return False
    for name, wanted in selectors.items():
        wanted = _selector(wanted)
        if wanted in ("", None):
            continue
        if _field(item, name) != wanted:
            return False
    return True


def filter_items(
    items: Iterable[T], query: str = "", text_fields: Sequence[str] = (), **selectors: Any
) -> list[T]:
    return [item for item in items if matches(item, query, text_fields, **selectors)]


def unique_values(items: Iterable[Any], name: str) -> list[Any]:
    """Distinct non-empty values of a field, in first-seen order (selector choices)."""
    seen: dict[Any, None] = {}
    for item in items:
        value = _field(item, name)
        if value not in ("", None):
            seen.setdefault(value, None)
    return list(seen)
