from __future__ import annotations

"""Tipos compartilhados entre o scraper do DJe e o worker."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

SOURCE_TAG_PORTAL = "TJSP_PLAYWRIGHT"
MIN_TEXT_LENGTH = 50
MAX_TEXT_LENGTH = 10000


class PublicationType(str, Enum):
    CITACAO = "citacao"
    INTIMACAO = "intimacao"
    SENTENCA = "sentenca"
    DECISAO = "decisao"
    DESPACHO = "despacho"
    ACORDAO = "acordao"
    EDITAL = "edital"
    OUTROS = "outros"


class Urgency(str, Enum):
    NORMAL = "normal"
    HIGH = "high"
    CRITICAL = "critical"


def _first_value(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = data.get(key)
        if value not in (None, ""):
            return value
    return None


@dataclass(slots=True, frozen=True)
class Job:
    id: str
    registration_number: str
    registration_state: str
    target_date: str
    attorney_name: str | None = None

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "Job":
        """Aceita tanto as chaves da fila (snake_case) quanto camelCase."""

        job_id = _first_value(data, "id", "jobId")
        number = _first_value(data, "oab_number", "registrationNumber", "registration_number")
        target = _first_value(data, "target_date", "targetDate")
        if job_id is None or number is None or target is None:
            raise ValueError(f"Job incompleto: {dict(data)!r}")
        state = _first_value(data, "oab_state", "registrationState", "registration_state") or ""
        name = _first_value(data, "lawyer_name", "attorneyName", "attorney_name")
        return Job(
            id=str(job_id),
            registration_number=str(number).strip(),
            registration_state=str(state).strip().upper(),
            target_date=str(target).strip(),
            attorney_name=str(name).strip() if name else None,
        )


@dataclass(slots=True, frozen=True)
class RejectedJob:
    """Job da fila com ``id`` mas sem os campos necessários para a busca."""

    id: str
    error: str
    registration_number: str = ""
    target_date: str = ""

    @staticmethod
    def from_dict(data: Any, error: str) -> "RejectedJob | None":
        if not isinstance(data, Mapping):
            return None
        job_id = _first_value(data, "id", "jobId")
        if job_id is None:
            return None
        number = _first_value(data, "oab_number", "registrationNumber", "registration_number")
        target = _first_value(data, "target_date", "targetDate")
        return RejectedJob(
            id=str(job_id),
            error=error,
            registration_number=str(number).strip() if number is not None else "",
            target_date=str(target).strip() if target is not None else "",
        )


@dataclass(slots=True, frozen=True)
class SearchStrategy:
    search_term: str
    description: str
    priority: int
    loose_name_match: bool = False


@dataclass(slots=True, frozen=True)
class RawResultBlock:
    text: str
    raw_date: str | None = None
    selector: str | None = None


@dataclass(slots=True, frozen=True)
class PublicationRecord:
    date: str
    type: PublicationType
    text: str
    urgency: Urgency
    source_tag: str
    process_number: str | None = None
    parties: tuple[str, ...] = field(default_factory=tuple)
    lawyers: tuple[str, ...] = field(default_factory=tuple)
    search_strategy_used: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "type": self.type.value,
            "text": self.text,
            "processNumber": self.process_number,
            "parties": list(self.parties),
            "lawyers": list(self.lawyers),
            "urgency": self.urgency.value,
            "sourceTag": self.source_tag,
            "searchStrategyUsed": self.search_strategy_used,
        }


__all__ = [
    "Job",
    "MAX_TEXT_LENGTH",
    "MIN_TEXT_LENGTH",
    "PublicationRecord",
    "PublicationType",
    "RawResultBlock",
    "RejectedJob",
    "SOURCE_TAG_PORTAL",
    "SearchStrategy",
    "Urgency",
]
