from __future__ import annotations

import logging
from typing import Optional, Sequence

from .model import Member
from .repository import MemberRepository

log = logging.getLogger(__name__)


class MemberService:
    def __init__(self, members: MemberRepository):
        self._members = members

    def list_active(self) -> list[Member]:
        members = [m for m in self._members.list_all() if m.is_active]
        log.debug("Loaded %d active members", len(members))
        return members

    @staticmethod
    def find(members: Sequence[Member], member_id: str) -> Optional[Member]:
        member_id = str(member_id)
        for m in members:
            if m.member_id == member_id:
                return m
        return None

    @staticmethod
    def departments(members: Sequence[Member]) -> list[str]:
        """Distinct departments in roster order (department filter options)."""

        seen: list[str] = []
        for m in members:
            if m.department and m.department not in seen:
                seen.append(m.department)
        return seen
