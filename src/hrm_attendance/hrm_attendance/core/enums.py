from __future__ import annotations

from enum import Enum, IntEnum
from typing import Optional


class Weekday(IntEnum):
    """Ngày trong tuần, cùng thứ tự với ``date.weekday()``."""

    MON = 0
    TUE = 1
    WED = 2
    THU = 3
    FRI = 4
    SAT = 5
    SUN = 6

    @property
    def short_name(self) -> str:
        return self.name.capitalize()


class MemberStatus(str, Enum):
    """Trạng thái hồ sơ thành viên (chỉ ACTIVE được tính vào danh sách)."""

    ACTIVE = "Active"
    INACTIVE = "Inactive"
    ON_LEAVE = "On Leave"
    TERMINATED = "Terminated"


class AttendanceStatus(str, Enum):
    """Trạng thái chấm công chuẩn hoá, giá trị trùng với nhãn lưu trong bảng tính."""

    ON_TIME = "On Time"
    LATE = "Late"
    ABSENT = "Absent"
    HALF_DAY = "Half Day"
    ON_LEAVE = "On Leave"
    # Legacy value written for punch-ins that could not be parsed.
    PRESENT = "Present"

    @property
    def is_present(self) -> bool:
        return self in (AttendanceStatus.ON_TIME, AttendanceStatus.PRESENT)


class EntryState(str, Enum):
    """Vòng đời một bản ghi chấm công trong phiên xem theo ngày."""

    NOT_ENTERED = "NOT_ENTERED"
    ENTERED = "ENTERED"
    EDITED = "EDITED"
    DELETED = "DELETED"


def coerce_status(value) -> Optional[AttendanceStatus]:
    """Map an enum, value, name or label to ``AttendanceStatus``.

    Blank or unknown input yields ``None``.
    """

    if value is None:
        return None
    if isinstance(value, AttendanceStatus):
        return value

    text = str(value).strip()
    if not text:
        return None

    key = text.replace("_", " ").replace("-", " ").lower()
    key = " ".join(key.split())
    for status in AttendanceStatus:
        if key in (status.value.lower(), status.name.replace("_", " ").lower()):
            return status
    return None
