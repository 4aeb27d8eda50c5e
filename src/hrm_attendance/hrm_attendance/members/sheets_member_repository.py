from __future__ import annotations

from typing import Sequence

from ..core.enums import MemberStatus
from ..gateway.connection import SheetsApiClient
from ..gateway.sheets_base import as_rows, text_or_none
from .model import Member
from .repository import MemberRepository


def _status(value) -> MemberStatus:
    text = (text_or_none(value) or "").lower()
    for s in MemberStatus:
        if s.value.lower() == text:
            return s
    return MemberStatus.INACTIVE


class SheetsMemberRepository(MemberRepository):
    def __init__(self, client: SheetsApiClient):
        self._client = client

    def list_all(self) -> Sequence[Member]:
        rows = as_rows(self._client.get("getAllMembers"))
        return [
            Member(
                member_id=str(r["memberId"]).strip(),
                name=text_or_none(r.get("name")) or str(r["memberId"]).strip(),
                department=text_or_none(r.get("department")),
                status=_status(r.get("status")),
                photo_url=text_or_none(r.get("photoURL")),
                email=text_or_none(r.get("email")),
            )
            for r in rows
            if text_or_none(r.get("memberId"))
        ]
