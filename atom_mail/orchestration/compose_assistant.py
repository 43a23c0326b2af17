"""
Compose Assistant

Server-side counterpart of the compose-view script: captures the email
being written and turns its analysis into panel suggestions.
"""

import logging
from typing import Dict, List, Mapping, Optional

from atom_mail.email_processing.analyzers.email_analyzer import EmailAnalyzer
from atom_mail.email_processing.handlers.compose import (
    DEFAULT_SENDER,
    extract_email_content,
    format_suggestions,
)

logger = logging.getLogger(__name__)


class ComposeAssistant:
    """Analyzes compositions on behalf of the compose view."""

    def __init__(self, analyzer: EmailAnalyzer, sender: str = DEFAULT_SENDER):
        self.analyzer = analyzer
        self.sender = sender

    async def handle_composition(self,
                                 fields: Mapping[str, Optional[str]]) -> Optional[List[Dict[str, str]]]:
        """
        Analyze the current composition.

        Args:
            fields: Compose form values (``to``, ``subject``, ``content``)

        Returns:
            Suggestion rows for the panel, or None if nothing has been written
        """
        email = extract_email_content(fields, sender=self.sender)
        if email is None:
            return None

        logger.debug("Extracted email content from compose view")
        analysis = await self.analyzer.analyze_email(email)
        return format_suggestions(analysis)
