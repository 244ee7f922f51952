from .aggregator import aggregate, build_failure_payload, build_payload, build_publication
from .dedupe import dedupe, fingerprint
from .extractors import (
    classify_type,
    classify_urgency,
    extract_lawyers,
    extract_parties,
    extract_process_number,
    extract_registration_refs,
)
from .parsing import ParsedResults, parse_results_html
from .relevance import is_relevant
from .text import normalize

__all__ = [
    'ParsedResults',
    'aggregate',
    'build_failure_payload',
    'build_payload',
    'build_publication',
    'classify_type',
    'classify_urgency',
    'dedupe',
    'extract_lawyers',
    'extract_parties',
    'extract_process_number',
    'extract_registration_refs',
    'fingerprint',
    'is_relevant',
    'normalize',
    'parse_results_html',
]
