from __future__ import annotations

"""Normalização de texto usada apenas para comparação.

O texto original das publicações é sempre preservado na saída; as funções
abaixo geram a forma canônica (sem acentos, maiúscula) usada pelos
extratores e pelo filtro de relevância.
"""

import re
import unicodedata

_WHITESPACE = re.compile(r"\s+")
_NON_DIGITS = re.compile(r"\D+")


def normalize(text: str | None) -> str:
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(c for c in decomposed if unicodedata.category(c) != "Mn")
    return stripped.upper()


def collapse_whitespace(text: str | None) -> str:
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip()


def normalize_for_match(text: str | None) -> str:
    return collapse_whitespace(normalize(text))


def digits_only(value: str | None) -> str:
    if not value:
        return ""
    return _NON_DIGITS.sub("", value)


__all__ = ["collapse_whitespace", "digits_only", "normalize", "normalize_for_match"]
