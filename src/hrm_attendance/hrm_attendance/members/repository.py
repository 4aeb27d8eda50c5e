from __future__ import annotations

from typing import Protocol, Sequence

from .model import Member


class MemberRepository(Protocol):
    """Giao diện repository cho danh bạ thành viên.

    Lưu ý (DIP): tầng service phụ thuộc vào interface này, không phụ thuộc trực tiếp API cụ thể.
    """

    def list_all(self) -> Sequence[Member]:
        raise NotImplementedError
