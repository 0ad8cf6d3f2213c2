"""Transactional email bodies sent by the marketplace."""

from django.conf import settings

from .interface import EmailMessage


def verification_code_email(email: str, code: str) -> EmailMessage:
    return EmailMessage(
        subject="Verify your CodeMart email",
        body=(
            f"Your verification code is {code}.\n\n"
            "The code expires in 15 minutes. If you did not create an account, ignore this email."
        ),
        to=[email],
        tags=["verify-email"],
    )


def password_reset_email(email: str, token: str) -> EmailMessage:
    reset_url = f"{settings.FRONTEND_URL}/reset-password/{token}"
    return EmailMessage(
        subject="Reset your CodeMart password",
        body=(
            f"Use the link below to choose a new password:\n{reset_url}\n\n"
            "The link expires in 2 hours. If you did not ask for a reset, ignore this email."
        ),
        to=[email],
        tags=["password-reset"],
    )


def support_ticket_received_email(email: str, title: str) -> EmailMessage:
    return EmailMessage(
        subject=f"We received your request: {title}",
        body=(
            "Thanks for contacting CodeMart support. "
            "Our team will get back to you as soon as possible."
        ),
        to=[email],
        tags=["support-received"],
    )
