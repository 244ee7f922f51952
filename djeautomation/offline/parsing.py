from __future__ import annotations

"""Leitura da página de resultados da consulta avançada do DJe."""

import re
from dataclasses import dataclass, field
from typing import List

from bs4 import BeautifulSoup, Tag

from djeautomation.models import MIN_TEXT_LENGTH, RawResultBlock

from .dedupe import dedupe_blocks
from .text import normalize

NO_RESULTS_MARKERS = (
    "Nenhum resultado encontrado",
    "Não foram encontrados",
    "sem resultado",
)
BLOCK_SELECTORS = (
    ".fundocinza1",
    ".fundocinza2",
    ".itemPublicacao",
    'div[class*="resultado"]',
)
FALLBACK_SELECTORS = ("#divConteudo", ".conteudo", "main")
FALLBACK_MIN_LENGTH = 100

RAW_DATE_PATTERN = re.compile(r"(?:DISPONIBILIZACAO|PUBLICACAO)\D{0,20}(\d{2}/\d{2}/\d{4})")


@dataclass
class ParsedResults:
    no_results: bool = False
    blocks: List[RawResultBlock] = field(default_factory=list)


def has_no_results_marker(page_text: str) -> bool:
    normalized = normalize(page_text)
    return any(normalize(marker) in normalized for marker in NO_RESULTS_MARKERS)


def _raw_date(text: str) -> str | None:
    match = RAW_DATE_PATTERN.search(normalize(text))
    return match.group(1) if match else None


def _overlaps(element: Tag, taken_ids: set[int]) -> bool:
    if element.find_parent(lambda tag: id(tag) in taken_ids) is not None:
        return True
    return any(id(child) in taken_ids for child in element.find_all(True))


def _block_from(element: Tag, selector: str) -> RawResultBlock:
    text = element.get_text(" ", strip=True)
    return RawResultBlock(text=text, raw_date=_raw_date(text), selector=selector)


def _result_rows(soup: BeautifulSoup) -> List[RawResultBlock]:
    blocks: List[RawResultBlock] = []
    taken_ids: set[int] = set()
    for selector in BLOCK_SELECTORS:
        for element in soup.select(selector):
            if id(element) in taken_ids or _overlaps(element, taken_ids):
                continue
            block = _block_from(element, selector)
            if len(block.text) <= MIN_TEXT_LENGTH:
                continue
            taken_ids.add(id(element))
            blocks.append(block)
    return blocks


def _content_fallback(soup: BeautifulSoup) -> List[RawResultBlock]:
    for selector in FALLBACK_SELECTORS:
        element = soup.select_one(selector)
        if element is None:
            continue
        block = _block_from(element, selector)
        if len(block.text) > FALLBACK_MIN_LENGTH:
            return [block]
    return []


def extract_blocks(soup: BeautifulSoup) -> List[RawResultBlock]:
    return dedupe_blocks(_result_rows(soup) or _content_fallback(soup))


def parse_results_html(html: str | bytes) -> ParsedResults:
    """Linhas de resultado primeiro; o aviso de "nenhum resultado" só vale sem elas.

    O texto das publicações pode conter as mesmas frases do aviso
    ("Não foram encontrados bens penhoráveis"), por isso o marcador nunca
    descarta uma página que tem linhas de resultado.
    """

    soup = BeautifulSoup(html, "html.parser")
    rows = _result_rows(soup)
    if rows:
        return ParsedResults(no_results=False, blocks=dedupe_blocks(rows))
    if has_no_results_marker(soup.get_text(" ", strip=True)):
        return ParsedResults(no_results=True)
    blocks = dedupe_blocks(_content_fallback(soup))
    return ParsedResults(no_results=not blocks, blocks=blocks)


__all__ = [
    "BLOCK_SELECTORS",
    "NO_RESULTS_MARKERS",
    "ParsedResults",
    "extract_blocks",
    "has_no_results_marker",
    "parse_results_html",
]
