"""
EmailAnalyzer: Email Insight and Reply Generation Service

Sends compose-view emails to a chat-completion model and converts the
free-text answers into structured analyses and reply drafts.

Design Considerations:
- One request per call with no retries; the caller owns retry decisions
- Email subject and content are placed into the prompt verbatim. This is
  a trust boundary: sender-controlled text reaches the model unfiltered
- Failures propagate as typed errors and nothing partial is returned
"""

import logging
import os
import time
from datetime import datetime
from typing import Dict, List, Optional

from atom_mail.config.analyzer_config import ANALYZER_CONFIG
from atom_mail.email_processing.handlers.extraction import (
    extract_actions,
    extract_key_points,
    extract_sentiment,
)
from atom_mail.email_processing.models import Analysis, Email, EmailContext, Response
from atom_mail.integrations.openai.client import ChatCompletionClient

logger = logging.getLogger(__name__)


class EmailAnalyzer:
    """
    Analysis client combining the completion endpoint with text extraction.

    Key capabilities:
    - Sentiment, key point and action extraction from an email
    - Reply generation for a summary and requested tone
    """

    def __init__(self,
                 completion_client: ChatCompletionClient,
                 model: Optional[str] = None,
                 config: Optional[Dict] = None):
        """
        Initialize the analyzer.

        Args:
            completion_client: Client used for every completion request
            model: Model identifier overriding the configured one
            config: Analyzer configuration, defaults to ANALYZER_CONFIG
        """
        self.client = completion_client
        self.config = config or ANALYZER_CONFIG
        self.analysis_config = self.config["email_analysis"]
        self.response_config = self.config["response_generation"]
        self.analysis_model = model or self.analysis_config["model"]["name"]
        self.response_model = model or self.response_config["model"]["name"]

        logger.debug(f"EmailAnalyzer initialized with models: "
                     f"analysis={self.analysis_model}, response={self.response_model}")

    async def analyze_email(self, email: Email) -> Analysis:
        """
        Analyze an email's subject and content.

        Args:
            email: Email captured from the compose view

        Returns:
            Analysis with sentiment, key points and suggested actions

        Raises:
            RemoteServiceError: If the completion endpoint fails
            EncodingError: If the request or response cannot be (de)serialized
        """
        request_id = self._request_id("analyze")
        start_time = time.time()
        logger.info(f"[{request_id}] Starting email analysis")
        logger.debug(f"[{request_id}] Subject length: {len(email.subject)}, "
                     f"content length: {len(email.content)}")

        user_prompt = self.analysis_config["user_prompt"].format(
            subject=email.subject,
            content=email.content
        )
        content = await self._complete(
            self.analysis_config,
            self.analysis_model,
            user_prompt,
            request_id
        )

        analysis = Analysis(
            sentiment=extract_sentiment(content),
            key_points=extract_key_points(content),
            suggested_actions=extract_actions(content)
        )

        logger.info(f"[{request_id}] Analysis completed in {time.time() - start_time:.3f} seconds: "
                    f"sentiment={analysis.sentiment.value}, "
                    f"{len(analysis.key_points)} key points, "
                    f"{len(analysis.suggested_actions)} actions")
        return analysis

    async def generate_response(self, context: EmailContext) -> Response:
        """
        Draft a reply for a conversation summary in the requested tone.

        Args:
            context: Summary and tone for the reply

        Returns:
            Response holding the raw completion text and the requested tone
        """
        request_id = self._request_id("respond")
        start_time = time.time()
        logger.info(f"[{request_id}] Starting response generation")

        user_prompt = self.response_config["user_prompt"].format(
            summary=context.summary,
            tone=context.tone
        )
        content = await self._complete(
            self.response_config,
            self.response_model,
            user_prompt,
            request_id
        )

        logger.info(f"[{request_id}] Response generated in {time.time() - start_time:.3f} seconds "
                    f"({len(content)} characters)")
        return Response(content=content, tone=context.tone, suggested_edits=[])

    async def _complete(self,
                        task_config: Dict,
                        model: str,
                        user_prompt: str,
                        request_id: str) -> str:
        messages: List[Dict[str, str]] = [
            {"role": "system", "content": task_config["system_prompt"]},
            {"role": "user", "content": user_prompt}
        ]

        try:
            completion = await self.client.create_completion(
                model=model,
                messages=messages,
                temperature=task_config["model"]["temperature"],
                max_tokens=task_config["model"]["max_tokens"]
            )
        except Exception as e:
            logger.error(f"[{request_id}] Completion request failed: {str(e)}")
            raise

        content = self.client.first_message_content(completion)
        if not content:
            logger.warning(f"[{request_id}] Completion contained no text")
        return content

    @staticmethod
    def _request_id(prefix: str) -> str:
        return f"{prefix}-{datetime.now().strftime('%Y%m%d%H%M%S')}-{os.urandom(3).hex()}"
