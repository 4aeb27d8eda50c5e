from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import MemberStatus


@dataclass(frozen=True)
class Member:
    """Thực thể miền (domain): thành viên trong danh bạ nhân sự.

    Lưu ý: Đây là đối tượng dữ liệu thuần (không chứa code truy cập API).
    """

    member_id: str
    name: str
    department: Optional[str] = None
    status: MemberStatus = MemberStatus.ACTIVE
    photo_url: Optional[str] = None
    email: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status == MemberStatus.ACTIVE
