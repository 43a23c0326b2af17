from .compose import extract_email_content, format_suggestions
from .extraction import extract_actions, extract_key_points, extract_sentiment

__all__ = [
    'extract_email_content',
    'format_suggestions',
    'extract_actions',
    'extract_key_points',
    'extract_sentiment'
]
