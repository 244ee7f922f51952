from __future__ import annotations

"""Montagem das publicações finais e do payload enviado ao webhook."""

from itertools import chain
from typing import Any, Iterable, List, Sequence

from dateutil import parser as date_parser

from djeautomation.models import (
    MAX_TEXT_LENGTH,
    MIN_TEXT_LENGTH,
    SOURCE_TAG_PORTAL,
    Job,
    PublicationRecord,
    RawResultBlock,
    RejectedJob,
    SearchStrategy,
)

from .dedupe import dedupe
from .extractors import (
    MAX_LAWYERS,
    classify_type,
    classify_urgency,
    extract_lawyers,
    extract_parties,
    extract_process_number,
)
from .text import normalize_for_match


def _record_date(raw_date: str | None, target_date: str) -> str:
    if not raw_date:
        return target_date
    try:
        return date_parser.parse(raw_date, dayfirst=True).date().isoformat()
    except (ValueError, OverflowError):
        return target_date


def _lawyers_for(text: str, attorney_name: str | None) -> tuple[str, ...]:
    names: List[str] = []
    seen: set[str] = set()
    for name in chain([attorney_name] if attorney_name else [], extract_lawyers(text)):
        key = normalize_for_match(name)
        if key in seen:
            continue
        seen.add(key)
        names.append(name)
    return tuple(names[:MAX_LAWYERS])


def build_publication(
    block: RawResultBlock,
    job: Job,
    strategy: SearchStrategy | None = None,
    *,
    source_tag: str = SOURCE_TAG_PORTAL,
) -> PublicationRecord | None:
    text = (block.text or "").strip()
    if len(text) < MIN_TEXT_LENGTH:
        return None
    return PublicationRecord(
        date=_record_date(block.raw_date, job.target_date),
        type=classify_type(text),
        text=text[:MAX_TEXT_LENGTH],
        urgency=classify_urgency(text),
        source_tag=source_tag,
        process_number=extract_process_number(text),
        parties=tuple(extract_parties(text)),
        lawyers=_lawyers_for(text, job.attorney_name),
        search_strategy_used=strategy.search_term if strategy else None,
    )


def aggregate(record_lists: Iterable[Sequence[PublicationRecord]]) -> List[PublicationRecord]:
    return dedupe(chain.from_iterable(record_lists))


def build_payload(job: Job, publications: Sequence[PublicationRecord]) -> dict[str, Any]:
    return {
        "jobId": job.id,
        "status": "completed",
        "publications": [record.to_dict() for record in publications],
        "resultsCount": len(publications),
        "registrationNumber": job.registration_number,
        "targetDate": job.target_date,
    }


def build_failure_payload(job: Job | RejectedJob, error: str) -> dict[str, Any]:
    return {
        "jobId": job.id,
        "status": "failed",
        "publications": [],
        "resultsCount": 0,
        "error": error,
        "registrationNumber": job.registration_number,
        "targetDate": job.target_date,
    }


__all__ = ["aggregate", "build_failure_payload", "build_payload", "build_publication"]
