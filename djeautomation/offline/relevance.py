from __future__ import annotations

"""Filtro de relevância: o bloco fala do advogado pedido?

A busca livre do portal não é precisa, por isso todo bloco retornado passa
por este segundo filtro antes de virar publicação.
"""

import re

from djeautomation.models import MIN_TEXT_LENGTH

from .extractors import UF_ALTERNATION
from .text import digits_only, normalize_for_match

MIN_NAME_TOKEN = 3


def _number_pattern(digits: str) -> str:
    # aceita separador de milhar (123.456) e zeros à esquerda
    body = r"\.?".join(re.escape(d) for d in digits)
    return rf"(?<!\d)(?<!\d\.)0*{body}(?!\.?\d)"


def registration_patterns(registration_number: str) -> list[re.Pattern[str]]:
    """Ordens aceitas de marcador OAB + número, sobre texto normalizado."""

    digits = digits_only(registration_number).lstrip("0")
    if not digits:
        return []
    number = _number_pattern(digits)
    state = rf"(?:{UF_ALTERNATION})\b"
    mark = r"(?:\s*N(?:UMERO|\.?\s?O|°)?\s*[.:]?)?"
    sep = r"\s*[/\-:.]?\s*"
    return [
        re.compile(rf"\bOAB{sep}{state}{mark}{sep}{number}"),
        re.compile(rf"\bOAB{mark}{sep}{number}"),
        re.compile(rf"{number}\s*[/\-]\s*{state}\W{{0,4}}OAB\b"),
        re.compile(rf"{number}\s+OAB\b"),
    ]


def matches_registration(normalized_text: str, registration_number: str) -> bool:
    return any(pattern.search(normalized_text) for pattern in registration_patterns(registration_number))


def matches_full_name(normalized_text: str, attorney_name: str | None) -> bool:
    name = normalize_for_match(attorney_name)
    if len(name) < MIN_NAME_TOKEN:
        return False
    return name in normalized_text


def matches_name_tokens(normalized_text: str, attorney_name: str | None) -> bool:
    tokens = normalize_for_match(attorney_name).split()
    if len(tokens) < 2:
        return False
    first, last = tokens[0], tokens[-1]
    if len(first) < MIN_NAME_TOKEN or len(last) < MIN_NAME_TOKEN:
        return False
    return all(re.search(rf"\b{re.escape(token)}\b", normalized_text) for token in (first, last))


def is_relevant(
    text: str | None,
    registration_number: str | None,
    attorney_name: str | None = None,
    *,
    loose: bool = False,
) -> bool:
    if not text or len(text.strip()) < MIN_TEXT_LENGTH:
        return False
    normalized = normalize_for_match(text)
    if registration_number and matches_registration(normalized, registration_number):
        return True
    if matches_full_name(normalized, attorney_name):
        return True
    return loose and matches_name_tokens(normalized, attorney_name)


__all__ = [
    "is_relevant",
    "matches_full_name",
    "matches_name_tokens",
    "matches_registration",
    "registration_patterns",
]
