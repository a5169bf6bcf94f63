"""Enumeraciones de estado compartidas por talentos y procesos.

Keeping them in the domain layer lets repositories, services and the CLI share
labels and backend id mappings without importing each other.
"""

from __future__ import annotations

from enum import Enum, IntEnum


class TalentStatus(IntEnum):
    """Estado de un talento tal como lo muestra el panel."""

    AVAILABLE = 1
    IN_PROCESS = 2
    HIRED = 3
    NOT_AVAILABLE = 4
    REJECTED = 5

    def label(self) -> str:
        return _TALENT_LABELS[self]

    def color(self) -> str:
        return _TALENT_COLORS[self]

    @classmethod
    def from_student_status(cls, value: object) -> "TalentStatus":
        """Map the backend StudentStatuses enum onto panel statuses.

        Backend: 1 Active, 2 Inactive, 3 InProgress, 4 Graduated, 5 Dropped,
        6 Employed. Anything else falls back to AVAILABLE.
        """

        try:
            key = int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return cls.AVAILABLE
        return _STUDENT_STATUS_MAP.get(key, cls.AVAILABLE)


_TALENT_LABELS = {
    TalentStatus.AVAILABLE: "Available",
    TalentStatus.IN_PROCESS: "In Process",
    TalentStatus.HIRED: "Hired",
    TalentStatus.NOT_AVAILABLE: "Not Available",
    TalentStatus.REJECTED: "Rejected",
}

_TALENT_COLORS = {
    TalentStatus.AVAILABLE: "success",
    TalentStatus.IN_PROCESS: "warning",
    TalentStatus.HIRED: "info",
    TalentStatus.NOT_AVAILABLE: "muted",
    TalentStatus.REJECTED: "destructive",
}

_STUDENT_STATUS_MAP = {
    1: TalentStatus.AVAILABLE,
    2: TalentStatus.NOT_AVAILABLE,
    3: TalentStatus.IN_PROCESS,
    4: TalentStatus.AVAILABLE,
    5: TalentStatus.REJECTED,
    6: TalentStatus.HIRED,
}


class SkillLevel(IntEnum):
    BEGINNER = 1
    INTERMEDIATE = 2
    ADVANCED = 3
    EXPERT = 4


class LanguageLevel(str, Enum):
    A1 = "A1"
    A2 = "A2"
    B1 = "B1"
    B2 = "B2"
    C1 = "C1"
    C2 = "C2"
    NATIVE = "NATIVE"


class ProcessStatus(IntEnum):
    """Estado de un proceso de selección."""

    DRAFT = 0
    ACTIVE = 1
    IN_PROGRESS = 2
    COMPLETED = 3
    CANCELLED = 4
    ON_HOLD = 5

    def label(self) -> str:
        return self.name.replace("_", " ").title()

    @property
    def is_active(self) -> bool:
        return self in (ProcessStatus.ACTIVE, ProcessStatus.IN_PROGRESS)

    @classmethod
    def from_api_id(cls, value: object) -> "ProcessStatus":
        """Backend ids: 0 borrador, 1 en espera, 2 en revisión, 3 en proceso,
        4 finalizado, 5 cancelado."""

        try:
            key = int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return cls.ACTIVE
        return _PROCESS_FROM_API.get(key, cls.ACTIVE)

    def to_api_id(self) -> int:
        return _PROCESS_TO_API[self]


_PROCESS_FROM_API = {
    0: ProcessStatus.DRAFT,
    1: ProcessStatus.ACTIVE,
    2: ProcessStatus.IN_PROGRESS,
    3: ProcessStatus.IN_PROGRESS,
    4: ProcessStatus.COMPLETED,
    5: ProcessStatus.CANCELLED,
}

_PROCESS_TO_API = {
    ProcessStatus.DRAFT: 0,
    ProcessStatus.ACTIVE: 1,
    ProcessStatus.IN_PROGRESS: 3,
    ProcessStatus.COMPLETED: 4,
    ProcessStatus.CANCELLED: 5,
    # The backend has no "on hold"; it parks the process as waiting.
    ProcessStatus.ON_HOLD: 1,
}


class ProcessPriority(IntEnum):
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    URGENT = 4

    def label(self) -> str:
        return self.name.title()

    @classmethod
    def parse(cls, value: object) -> "ProcessPriority":
        if isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 4:
            return cls(value)
        return cls.MEDIUM
