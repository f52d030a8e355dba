from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Trạng thái chấm công được phép lưu trong sổ chấm công."""

    PRESENT = "Present"
    ABSENT = "Absent"
