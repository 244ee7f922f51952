from __future__ import annotations

"""Extração de entidades das publicações do DJe.

Cada extrator mantém uma única lista ordenada de regras. A ordem é parte do
contrato: ``classify_type`` e ``classify_urgency`` devolvem a primeira regra
satisfeita.
"""

import math
import re
from typing import Iterable, List, NamedTuple

from djeautomation.models import PublicationType, Urgency

from .text import digits_only, normalize

UFS = (
    "AC", "AL", "AM", "AP", "BA", "CE", "DF", "ES", "GO", "MA", "MG", "MS", "MT", "PA",
    "PB", "PE", "PI", "PR", "RJ", "RN", "RO", "RR", "RS", "SC", "SE", "SP", "TO",
)
UF_ALTERNATION = "|".join(UFS)

MAX_PARTIES = 10
MAX_LAWYERS = 10
MIN_REGISTRATION_DIGITS = 4

PROCESS_NUMBER_PATTERN = re.compile(r"(?<!\d)\d{7}-\d{2}\.\d{4}\.\d\.\d{2}\.\d{4}(?!\d)")

# Todos os padrões abaixo rodam sobre texto normalizado (sem acento, maiúsculo).
_NUMBER = r"(?P<number>\d{1,3}(?:\.\d{3})+|\d+)(?!\d)"
_STATE = rf"(?P<state>{UF_ALTERNATION})\b"
_NUMERO_MARK = r"(?:\s*N(?:UMERO|\.?\s?O|°)?\s*[.:]?)?"
_SEP = r"\s*[/\-:.]?\s*"

REGISTRATION_RULES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("prefixo-uf-numero", re.compile(rf"\bOAB{_SEP}{_STATE}{_NUMERO_MARK}{_SEP}{_NUMBER}")),
    ("prefixo-numero-uf", re.compile(rf"\bOAB{_NUMERO_MARK}{_SEP}{_NUMBER}\s*[/\-]\s*{_STATE}")),
    ("numero-uf", re.compile(rf"(?<![\d/])(?<!\d\.){_NUMBER}\s?[/\-]\s?{_STATE}")),
)

TYPE_RULES: tuple[tuple[PublicationType, re.Pattern[str]], ...] = (
    (PublicationType.SENTENCA, re.compile(r"\b(?:SENTENCA|JULGO (?:IM)?PROCEDENTE|JULGO EXTINT)")),
    (PublicationType.DECISAO, re.compile(r"\bDECISAO")),
    (PublicationType.DESPACHO, re.compile(r"\bDESPACHO")),
    (PublicationType.CITACAO, re.compile(r"\b(?:CITACAO|CITE-SE|CITEM-SE)")),
    (PublicationType.INTIMACAO, re.compile(r"\b(?:INTIMACAO|INTIME-SE|INTIMEM-SE|INTIMAD[OA])")),
    (PublicationType.ACORDAO, re.compile(r"\b(?:ACORDAO|ACORDAM)")),
    (PublicationType.EDITAL, re.compile(r"\bEDITA(?:L|IS)\b")),
)

URGENT_PATTERN = re.compile(r"\bURGEN(?:TE|TES|CIA|CIAS)\b")
DEADLINE_PATTERN = re.compile(
    r"\bPRAZO(?:\s+(?:LEGAL|COMUM|IMPRORROGAVEL|SUCESSIVO))?\s+(?:DE\s+)?"
    r"(?P<amount>\d{1,3})\s*(?:\([^)]{0,40}\)\s*)?(?P<unit>DIAS?|HORAS?)\b"
)
SUMMONS_PATTERN = re.compile(r"\b(?:CITACAO|CITE-SE|CITEM-SE|MANDADO)\b")
CRITICAL_DEADLINE_DAYS = 2
HIGH_DEADLINE_DAYS = 5

# Rótulos de parte e suas abreviações usuais no DJe.
PARTY_LABELS = (
    "autor", "autora", "autores", "requerente", "reqte", "exequente", "exeqte", "reclamante",
    "impetrante", "embargante", "apelante", "apte", "agravante", "agrte", "recorrente", "recte",
    "réu", "reu", "ré", "requerido", "requerida", "reqdo", "reqda", "executado", "executada",
    "exectdo", "exectda", "reclamado", "reclamada", "impetrado", "embargado", "embargada",
    "apelado", "apelada", "apdo", "apda", "agravado", "agravada", "agrdo", "agrda",
    "recorrido", "recorrida", "recdo", "recda",
)
_LABEL_ALTERNATION = "|".join(sorted(PARTY_LABELS, key=len, reverse=True))
PARTY_PATTERN = re.compile(
    rf"(?<!\w)(?:{_LABEL_ALTERNATION})s?\s*:\s*"
    r"(?P<name>[^\n;:()]{2,120}?)"
    r"(?=\s+[-–]\s|\s*[;\n(]|,\s|\.\s|\.?\s*$"
    rf"|\s*,?\s*\b(?:adv|advs|advogad[oa]s?|oab)\b|\s+(?:{_LABEL_ALTERNATION})s?\s*:)",
    re.IGNORECASE,
)
LAWYER_PATTERN = re.compile(
    r"(?P<name>[A-ZÀ-Ý][A-ZÀ-Ý'.]+(?:\s+[A-ZÀ-Ý][A-ZÀ-Ý'.]*)+)\s*\(\s*OAB"
)


class RegistrationRef(NamedTuple):
    number: str
    state: str


def extract_process_number(text: str | None) -> str | None:
    if not text:
        return None
    match = PROCESS_NUMBER_PATTERN.search(text)
    return match.group(0) if match else None


def extract_registration_refs(text: str | None) -> List[RegistrationRef]:
    """Referências de OAB encontradas no texto, sem repetição (UF+número)."""

    normalized = normalize(text)
    if not normalized:
        return []
    found: dict[tuple[str, str], tuple[int, RegistrationRef]] = {}
    for _name, pattern in REGISTRATION_RULES:
        for match in pattern.finditer(normalized):
            number = digits_only(match.group("number")).lstrip("0")
            if len(number) < MIN_REGISTRATION_DIGITS:
                continue
            ref = RegistrationRef(number=number, state=match.group("state"))
            key = (ref.state, ref.number)
            if key not in found or match.start() < found[key][0]:
                found[key] = (match.start(), ref)
    return [ref for _pos, ref in sorted(found.values(), key=lambda item: item[0])]


def _clean_name(value: str) -> str:
    return value.strip().strip(" -–,;").strip()


def _unique(values: Iterable[str], limit: int) -> List[str]:
    seen: set[str] = set()
    result: List[str] = []
    for value in values:
        key = normalize(value)
        if not value or key in seen:
            continue
        seen.add(key)
        result.append(value)
        if len(result) >= limit:
            break
    return result


def extract_parties(text: str | None) -> List[str]:
    if not text:
        return []
    names = (_clean_name(match.group("name")) for match in PARTY_PATTERN.finditer(text))
    return _unique((name for name in names if len(name) >= 3), MAX_PARTIES)


def extract_lawyers(text: str | None) -> List[str]:
    if not text:
        return []
    names = (_clean_name(match.group("name")) for match in LAWYER_PATTERN.finditer(text))
    return _unique(names, MAX_LAWYERS)


def classify_type(text: str | None) -> PublicationType:
    normalized = normalize(text)
    for publication_type, pattern in TYPE_RULES:
        if pattern.search(normalized):
            return publication_type
    return PublicationType.OUTROS


def _shortest_deadline_days(normalized: str) -> int | None:
    shortest: int | None = None
    for match in DEADLINE_PATTERN.finditer(normalized):
        amount = int(match.group("amount"))
        days = math.ceil(amount / 24) if match.group("unit").startswith("HORA") else amount
        if shortest is None or days < shortest:
            shortest = days
    return shortest


def classify_urgency(text: str | None) -> Urgency:
    normalized = normalize(text)
    if URGENT_PATTERN.search(normalized):
        return Urgency.CRITICAL
    days = _shortest_deadline_days(normalized)
    if days is not None:
        if days <= CRITICAL_DEADLINE_DAYS:
            return Urgency.CRITICAL
        if days <= HIGH_DEADLINE_DAYS:
            return Urgency.HIGH
    if SUMMONS_PATTERN.search(normalized):
        return Urgency.HIGH
    return Urgency.NORMAL


__all__ = [
    "RegistrationRef",
    "UFS",
    "classify_type",
    "classify_urgency",
    "extract_lawyers",
    "extract_parties",
    "extract_process_number",
    "extract_registration_refs",
]
