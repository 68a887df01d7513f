"""Response Parser.

Turns a completion that already passed the refusal check into the structured
payload of its operation. Formatting failures are provider flakiness, so they
degrade to a safe default (Degraded) instead of raising. Errors from the
invoker travel as Err so a caller can handle all three cases from one value.
"""

import json
import re
from dataclasses import dataclass
from typing import Any

from services.operations import CATEGORIES

ARRAY_SPAN = re.compile(r'\[.*\]', re.DOTALL)
OBJECT_SPAN = re.compile(r'\{.*\}', re.DOTALL)


@dataclass(frozen=True)
class Ok:
    value: Any


@dataclass(frozen=True)
class Degraded:
    value: Any
    reason: str


@dataclass(frozen=True)
class Err:
    error: Exception


def unwrap(outcome):
    """Return the payload of Ok/Degraded, raise the error carried by Err."""
    if isinstance(outcome, Err):
        raise outcome.error
    return outcome.value


def _load_span(pattern, completion, expected_type):
    """Greedy-extract the first bracketed span and json-decode it.

    Returns None when there is no span, the span is not valid JSON, or it
    decodes to the wrong type.
    """
    match = pattern.search(completion or '')
    if not match:
        return None
    try:
        data = json.loads(match.group(0))
    except ValueError:
        return None
    return data if isinstance(data, expected_type) else None


def parse_text(completion):
    return Ok(completion)


def parse_tags(completion, max_tags=5):
    items = _load_span(ARRAY_SPAN, completion, list)
    if items is None:
        return Degraded([], 'no JSON array in completion')
    tags = [item.lower().strip() for item in items if isinstance(item, str)]
    return Ok([tag for tag in tags if tag][:max_tags])


def parse_titles(completion, count=5):
    items = _load_span(ARRAY_SPAN, completion, list)
    if items is None:
        return Degraded([], 'no JSON array in completion')
    titles = [item.strip() for item in items if isinstance(item, str)]
    return Ok([title for title in titles if title][:count])


def parse_improvement(completion, original):
    data = _load_span(OBJECT_SPAN, completion, dict)
    if data is None or not isinstance(data.get('improved'), str):
        return Degraded({'improved': original, 'changes': [], 'degraded': True},
                        'no usable JSON object in completion')

    changes = data.get('changes') or []
    if not isinstance(changes, list):
        changes = []
    return Ok({
        'improved': data['improved'],
        'changes': [str(change) for change in changes],
        'degraded': False,
    })


def parse_grammar(completion, original):
    data = _load_span(OBJECT_SPAN, completion, dict)
    if data is None or not isinstance(data.get('corrected'), str):
        return Degraded({'corrected': original, 'errors': [], 'degraded': True},
                        'no usable JSON object in completion')

    entries = data.get('errors')
    if not isinstance(entries, list):
        entries = []

    errors = []
    for entry in entries:
        # Entries without both sides of the correction are useless to the editor
        if not isinstance(entry, dict) or 'original' not in entry or 'correction' not in entry:
            continue
        errors.append({
            'original': str(entry['original']),
            'correction': str(entry['correction']),
            'type': str(entry.get('type', 'grammar')),
        })
    return Ok({'corrected': data['corrected'], 'errors': errors, 'degraded': False})


def parse_category(completion):
    answer = (completion or '').strip().lower()
    for category in CATEGORIES:
        if category.lower() == answer:
            return Ok(category)
    return Degraded('Other', f'unknown category {answer[:50]!r}')
