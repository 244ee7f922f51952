from __future__ import annotations

import hashlib
from typing import Iterable, List, Protocol, Sequence, TypeVar

from djeautomation.models import RawResultBlock

from .text import normalize_for_match

FINGERPRINT_CHARS = 500


class _HasText(Protocol):
    text: str
    process_number: str | None


T = TypeVar("T", bound=_HasText)


def text_fingerprint(text: str | None) -> str:
    head = normalize_for_match(text)[:FINGERPRINT_CHARS]
    return "txt:" + hashlib.sha1(head.encode("utf-8")).hexdigest()


def fingerprint(text: str | None, process_number: str | None = None) -> str:
    """Chave de duplicidade: número CNJ quando houver, senão hash do início do texto."""

    if process_number:
        return f"cnj:{process_number}"
    return text_fingerprint(text)


def dedupe(records: Iterable[T]) -> List[T]:
    seen: set[str] = set()
    unique: List[T] = []
    for record in records:
        key = fingerprint(record.text, record.process_number)
        if key in seen:
            continue
        seen.add(key)
        unique.append(record)
    return unique


def dedupe_blocks(blocks: Sequence[RawResultBlock]) -> List[RawResultBlock]:
    seen: set[str] = set()
    unique: List[RawResultBlock] = []
    for block in blocks:
        key = text_fingerprint(block.text)
        if key in seen:
            continue
        seen.add(key)
        unique.append(block)
    return unique


__all__ = ["dedupe", "dedupe_blocks", "fingerprint", "text_fingerprint"]
