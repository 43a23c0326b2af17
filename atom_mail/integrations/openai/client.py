"""
Chat-Completion HTTP Client

Thin wrapper around an OpenAI-compatible ``/chat/completions`` endpoint.
Each call builds its own request, performs a single POST and either
returns the decoded response body or raises a typed error. Retry and
backoff decisions belong to the caller.
"""

import asyncio
import json
import logging
import time
from typing import Any, Dict, Optional

import requests

from atom_mail.config.analyzer_config import ANALYZER_CONFIG
from atom_mail.errors import EncodingError, RemoteServiceError

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = ANALYZER_CONFIG["completion_endpoint"]["api_endpoint"]
DEFAULT_TIMEOUT = ANALYZER_CONFIG["completion_endpoint"]["timeout"]


class ChatCompletionClient:
    """Client for a chat-completion endpoint authenticated with a bearer key."""

    def __init__(self,
                 api_key: str,
                 api_endpoint: str = DEFAULT_ENDPOINT,
                 timeout: float = DEFAULT_TIMEOUT):
        self.api_key = api_key
        self.api_endpoint = api_endpoint
        self.timeout = timeout

        if not self.api_key:
            logger.warning("Completion API key is empty; requests will be rejected by the endpoint")

    async def create_completion(self, **params: Any) -> Dict:
        """
        Request a chat completion.

        Args:
            **params: Request body fields (model, messages, temperature, max_tokens)

        Returns:
            Decoded response body

        Raises:
            EncodingError: If the request or response body is not valid JSON
            RemoteServiceError: If the endpoint is unreachable or answers non-2xx
        """
        return await asyncio.to_thread(self._post, params)

    def _post(self, params: Dict[str, Any]) -> Dict:
        try:
            body = json.dumps(params)
        except (TypeError, ValueError) as e:
            raise EncodingError(f"Failed to encode completion request: {str(e)}") from e

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}"
        }

        start_time = time.time()
        try:
            response = requests.post(
                self.api_endpoint,
                headers=headers,
                data=body,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Completion request failed: {type(e).__name__}: {str(e)}")
            raise RemoteServiceError(f"OpenAI API error: {str(e)}") from e

        logger.debug(f"Completion response status: {response.status_code} "
                     f"({time.time() - start_time:.3f}s)")

        if not response.ok:
            logger.error(f"Completion endpoint returned {response.status_code} {response.reason}")
            raise RemoteServiceError(
                f"OpenAI API error: {response.reason}",
                status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError as e:
            raise EncodingError(f"Failed to decode completion response: {str(e)}") from e

    @staticmethod
    def first_message_content(completion: Optional[Dict]) -> str:
        """
        Return the text of the first completion choice.

        A missing choice or message, or content that is not text, yields an
        empty string.
        """
        if not isinstance(completion, dict):
            return ""
        choices = completion.get("choices") or []
        if not choices or not isinstance(choices[0], dict):
            return ""
        message = choices[0].get("message") or {}
        if not isinstance(message, dict):
            return ""
        content = message.get("content")
        return content if isinstance(content, str) else ""
