from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_iso_date
from ..core.enums import Role


@dataclass(frozen=True)
class ActorContext:
    """Who is acting on the attendance screens.

    Built by the web layer (see ``from_session``) and passed explicitly into every
    service call.
    """

    user_id: int
    role: Role
    account_id: Optional[int] = None
    course_id: Optional[int] = None
    user_name: str = ""
    leave_date: Optional[date] = None

    @property
    def is_student(self) -> bool:
        return self.role == Role.STUDENT

    @property
    def has_left(self) -> bool:
        return self.leave_date is not None

    @classmethod
    def from_session(cls, session: Mapping[str, Any]) -> Optional["ActorContext"]:
        if "user_id" not in session:
            return None

        leave_date = session.get("leave_date")
        account_id = session.get("account_id")
        course_id = session.get("course_id")
        return cls(
            user_id=int(session["user_id"]),
            role=Role(session.get("role", Role.STUDENT.value)),
            account_id=int(account_id) if account_id is not None else None,
            course_id=int(course_id) if course_id is not None else None,
            user_name=str(session.get("user_name") or ""),
            leave_date=parse_iso_date(leave_date) if leave_date else None,
        )
