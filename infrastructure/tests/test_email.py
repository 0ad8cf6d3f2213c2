"""
Email Service Tests
====================
"""

from unittest.mock import patch

from django.core import mail
from django.test import SimpleTestCase, TestCase, override_settings

from infrastructure.email import EmailException, EmailFactory, EmailMessage, MockEmailService, SMTPEmailService
from infrastructure.email.messages import support_ticket_received_email


class EmailMessageTest(SimpleTestCase):
    def test_support_ticket_message(self):
        message = support_ticket_received_email("buyer@example.com", "Broken preview")

        self.assertEqual(message.to, ["buyer@example.com"])
        self.assertIn("Broken preview", message.subject)


class MockEmailServiceTest(SimpleTestCase):
    def setUp(self):
        self.service = MockEmailService()

    def test_send_records_message(self):
        message = EmailMessage(subject="Hi", body="Body", to=["a@example.com"])

        self.assertTrue(self.service.send(message))
        self.assertEqual(self.service.get_last_message(), message)

    def test_clear(self):
        self.service.send(EmailMessage(subject="Hi", body="Body", to=["a@example.com"]))

        self.service.clear_sent_messages()

        self.assertIsNone(self.service.get_last_message())


@override_settings(
    EMAIL_BACKEND="django.core.mail.backends.locmem.EmailBackend",
    DEFAULT_FROM_EMAIL="shop@codemart.dev",
)
class SMTPEmailServiceTest(TestCase):
    def test_send_uses_django_backend(self):
        service = SMTPEmailService()

        sent = service.send(
            EmailMessage(subject="Receipt", body="Thanks", to=["a@example.com"], html_body="<p>Thanks</p>")
        )

        self.assertTrue(sent)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].from_email, "shop@codemart.dev")
        self.assertEqual(mail.outbox[0].alternatives[0][1], "text/html")

    @patch("infrastructure.email.smtp_service.EmailMultiAlternatives.send", side_effect=OSError("refused"))
    def test_backend_failure_raises_email_exception(self, mock_send):
        with self.assertRaises(EmailException):
            SMTPEmailService().send(EmailMessage(subject="x", body="y", to=["a@example.com"]))


class EmailFactoryTest(SimpleTestCase):
    def test_explicit_backends(self):
        self.assertIsInstance(EmailFactory.create("mock"), MockEmailService)
        self.assertIsInstance(EmailFactory.create("smtp"), SMTPEmailService)

    def test_invalid_backend(self):
        with self.assertRaises(ValueError):
            EmailFactory.create("pigeon")
