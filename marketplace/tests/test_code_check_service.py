"""
Tests for CodeCheckService
"""

from django.test import SimpleTestCase

from infrastructure.ai import MockAIProvider
from infrastructure.ai.interface import CodeReview
from marketplace.catalog.domain.services.code_check_service import MAX_CODE_LENGTH, CodeCheckService
from utils.service_base import ErrorCodes


class PerformCodeCheckTest(SimpleTestCase):
    def setUp(self):
        self.ai = MockAIProvider()
        self.service = CodeCheckService(ai_provider=self.ai)

    def test_returns_provider_review(self):
        self.ai.next_review = CodeReview(
            security_score=40,
            maintainability_score=60,
            readability_score=80,
            security_suggestion="Sanitize the href prop.",
            maintainability_suggestion="Type the props.",
            readability_suggestion="Shorten the render method.",
            overall_description="Works, but trusts its input.",
        )

        result = self.service.perform_code_check("const Link = (p) => <a href={p.href} />;", "TSX")

        self.assertTrue(result.ok)
        self.assertEqual(result.value.security_score, 40)
        self.assertEqual(self.ai.calls, [("const Link = (p) => <a href={p.href} />;", "TSX")])

    def test_blank_code_rejected(self):
        result = self.service.perform_code_check("   \n", "JSX")

        self.assertFalse(result.ok)
        self.assertEqual(result.error, ErrorCodes.INVALID_INPUT)
        self.assertEqual(self.ai.calls, [])

    def test_oversized_code_rejected(self):
        result = self.service.perform_code_check("x" * (MAX_CODE_LENGTH + 1), "JSX")

        self.assertEqual(result.error, ErrorCodes.INVALID_INPUT)

    def test_unknown_language_rejected(self):
        result = self.service.perform_code_check("print('hi')", "PY")

        self.assertEqual(result.error, ErrorCodes.INVALID_INPUT)
        self.assertEqual(self.ai.calls, [])

    def test_provider_failure(self):
        self.ai.error = "rate limited"

        result = self.service.perform_code_check("const a = 1;", "JSX")

        self.assertFalse(result.ok)
        self.assertEqual(result.error, ErrorCodes.CODE_CHECK_FAILED)
