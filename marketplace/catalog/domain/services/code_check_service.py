"""
CodeCheckService - AI Code Quality Check

Scores a snippet for security, maintainability and readability before a
seller lists it.
"""

import logging
from typing import Optional

from infrastructure.ai import AIException, AIProviderInterface, CodeReview
from marketplace.catalog.domain.models import CodeRepo
from marketplace.infra.observability import metrics
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


logger = logging.getLogger(__name__)

MAX_CODE_LENGTH = 100_000


class CodeCheckService(BaseService):
    def __init__(self, ai_provider: Optional[AIProviderInterface] = None):
        super().__init__()
        if ai_provider is None:
            from infrastructure.container import container

            ai_provider = container.ai()
        self.ai_provider = ai_provider

    @BaseService.log_performance
    def perform_code_check(self, code: str, language: str) -> ServiceResult[CodeReview]:
        """
        Review a snippet with the configured AI provider.

        Args:
            code: Source code
            language: One of the catalog languages (JSX, TSX)

        Returns:
            ServiceResult with the CodeReview
        """
        if not code or not code.strip():
            return service_err(ErrorCodes.INVALID_INPUT, "Code is required")
        if len(code) > MAX_CODE_LENGTH:
            return service_err(ErrorCodes.INVALID_INPUT, f"Code must be at most {MAX_CODE_LENGTH} characters")
        languages = [choice for choice, _ in CodeRepo.LANGUAGE_CHOICES]
        if language not in languages:
            return service_err(ErrorCodes.INVALID_INPUT, f"Language must be one of: {', '.join(languages)}")

        try:
            review = self.ai_provider.review_code(code, language)
        except AIException as e:
            metrics.code_checks_total.labels(language=language, result="failed").inc()
            self.logger.error(f"Code check failed: {e}")
            return service_err(ErrorCodes.CODE_CHECK_FAILED, "Code check failed, please try again later")

        metrics.code_checks_total.labels(language=language, result="ok").inc()
        return service_ok(review)
