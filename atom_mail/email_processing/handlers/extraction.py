"""
Completion text extraction.

Turns free-form model output into the structured fields of an analysis
using keyword heuristics. The rules are plain substring tests and
changing them changes what users see.
"""

import re
from typing import Callable, List

from atom_mail.email_processing.models import Sentiment

POSITIVE_KEYWORDS = ('positive', 'good', 'great')
NEGATIVE_KEYWORDS = ('negative', 'bad', 'poor')
ACTION_KEYWORDS = ('action', 'recommend', 'suggest')
KEY_POINT_HEADER = 'key point'

BULLET_PATTERN = re.compile(r'^[-•*]\s*')


def extract_sentiment(content: str) -> Sentiment:
    """Classify text by keyword; positive keywords are checked first."""
    lower_content = content.lower()
    if any(keyword in lower_content for keyword in POSITIVE_KEYWORDS):
        return Sentiment.POSITIVE
    if any(keyword in lower_content for keyword in NEGATIVE_KEYWORDS):
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL


def strip_bullet(line: str) -> str:
    return BULLET_PATTERN.sub('', line, count=1)


def _select_lines(content: str, keep: Callable[[str], bool]) -> List[str]:
    lines = (line.strip() for line in content.split('\n'))
    return [strip_bullet(line) for line in lines if keep(line)]


def extract_key_points(content: str) -> List[str]:
    """Every non-empty line except key-point headers, bullets removed."""
    return _select_lines(
        content,
        lambda line: len(line) > 0 and KEY_POINT_HEADER not in line.lower()
    )


def extract_actions(content: str) -> List[str]:
    """Lines that mention an action, recommendation or suggestion, bullets removed."""
    return _select_lines(
        content,
        lambda line: any(keyword in line.lower() for keyword in ACTION_KEYWORDS)
    )
