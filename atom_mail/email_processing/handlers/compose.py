"""
Compose view helpers.

Builds Email records from the values of a compose form and formats an
analysis into the rows shown in the assistant panel.
"""

from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional

from atom_mail.email_processing.models import Analysis, Email

DEFAULT_SENDER = "user@example.com"


def capture_timestamp() -> str:
    """Current UTC time in ISO-8601 with milliseconds and a ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def extract_email_content(fields: Mapping[str, Optional[str]],
                          sender: str = DEFAULT_SENDER) -> Optional[Email]:
    """
    Build an Email from compose form values.

    Args:
        fields: Form values keyed by ``to``, ``subject`` and ``content``
        sender: Address of the composing user

    Returns:
        The captured Email, or None when there is no content yet
    """
    content = fields.get('content') or ''
    if not content:
        return None

    to = fields.get('to') or ''
    return Email(
        to=to,
        subject=fields.get('subject') or '',
        content=content,
        sender=sender,
        recipients=[to],
        timestamp=capture_timestamp()
    )


def format_suggestions(analysis: Analysis) -> List[Dict[str, str]]:
    return [
        {'id': 'sentiment', 'content': f"Sentiment: {analysis.sentiment.value}"},
        {'id': 'keyPoints', 'content': f"Key Points: {', '.join(analysis.key_points)}"},
        {'id': 'actions', 'content': f"Suggested Actions: {', '.join(analysis.suggested_actions)}"}
    ]
