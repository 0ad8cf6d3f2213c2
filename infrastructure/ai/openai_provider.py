"""
OpenAI Provider
================

Code review through the OpenAI chat completions API with JSON output.
"""

import json
import logging
from typing import Dict, List, Optional

import openai
from django.conf import settings
from openai import OpenAI
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from .interface import AIException, AIProviderInterface, CodeReview


logger = logging.getLogger(__name__)

openai_retry = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    retry=retry_if_exception_type(
        (
            openai.RateLimitError,
            openai.APIConnectionError,
            openai.InternalServerError,
        )
    ),
    reraise=True,
)

SYSTEM_PROMPT = """You review front-end source code for a code marketplace.
Score the code from 0 to 100 in three areas, where 0 is worst and 100 is best:
security, maintainability and readability. Base every suggestion on the given
code only.

Answer with a JSON object holding exactly these keys:
  overall_description: one or two sentences on overall quality
  security_score: integer 0-100
  security_suggestion: how to improve security
  maintainability_score: integer 0-100
  maintainability_suggestion: how to improve maintainability
  readability_score: integer 0-100
  readability_suggestion: how to improve readability"""


class OpenAIProvider(AIProviderInterface):
    """
    OpenAI provider implementation.

    Configuration (in settings.py):
        OPENAI_API_KEY: API key
        OPENAI_MODEL: Chat model name
        OPENAI_MAX_TOKENS: Completion token limit
    """

    def __init__(self, client: Optional[OpenAI] = None):
        self.api_key = getattr(settings, "OPENAI_API_KEY", "")
        self.model = getattr(settings, "OPENAI_MODEL", "gpt-4o")
        self.max_tokens = getattr(settings, "OPENAI_MAX_TOKENS", 800)
        self._client = client

        if not self.api_key and client is None:
            logger.warning("OPENAI_API_KEY not configured")

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            if not self.api_key:
                raise AIException("OpenAI API key is not configured")
            self._client = OpenAI(api_key=self.api_key, max_retries=0)
        return self._client

    @openai_retry
    def _complete(self, messages: List[Dict[str, str]]) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            response_format={"type": "json_object"},
            temperature=0.2,
            max_tokens=self.max_tokens,
        )
        return response.choices[0].message.content or ""

    def review_code(self, code: str, language: str) -> CodeReview:
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": f"Analyze the following {language} code:\n\n{code}"},
        ]
        try:
            content = self._complete(messages)
        except openai.OpenAIError as e:
            logger.error(f"OpenAI code review failed: {e}")
            raise AIException(f"Code review failed: {e}") from e

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise AIException("Model returned invalid JSON") from e
        if not isinstance(data, dict):
            raise AIException("Model returned invalid JSON")

        return CodeReview.from_dict(data)
