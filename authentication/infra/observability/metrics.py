"""
Prometheus Metrics

Authentication and seller-onboarding metrics, exposed at /metrics.
"""

from prometheus_client import Counter, Histogram

# ===== Login Metrics =====

login_total = Counter("auth_login_total", "Total login attempts", ["status"])
"""
Total login attempts counter.
Labels: status (success/failed)
"""

login_failed = Counter("auth_login_failed", "Failed login attempts", ["reason"])
"""
Failed login attempts counter.
Labels: reason (invalid_credentials, user_banned, validation_error)

Example:
    login_failed.labels(reason='user_banned').inc()
"""

login_duration = Histogram(
    "auth_login_duration_seconds", "Login request duration in seconds", buckets=[0.1, 0.5, 1.0, 2.0, 5.0, 10.0]
)


# ===== Registration Metrics =====

registration_total = Counter("auth_registration_total", "Total registration attempts", ["status"])

registration_failed = Counter("auth_registration_failed", "Failed registration attempts", ["reason"])
"""
Labels: reason (email_exists, validation_error, etc.)
"""


# ===== Email Verification / Password Reset =====

email_verification_sent = Counter("auth_email_verification_sent", "Total verification emails sent", ["type"])
"""
Labels: type (registration, resend)
"""

email_verification_completed = Counter("auth_email_verification_completed", "Total successful email verifications")

password_reset_requested = Counter("auth_password_reset_requested", "Password reset emails requested")

password_reset_completed = Counter("auth_password_reset_completed", "Passwords successfully reset")


# ===== Moderation =====

user_bans_total = Counter("auth_user_bans_total", "Ban and unban actions", ["action"])


# ===== Seller Onboarding =====

seller_applications_total = Counter("auth_seller_applications_total", "Seller applications submitted")

seller_status_changes = Counter("auth_seller_status_changes_total", "Seller verification status changes", ["status"])
"""
Labels: status (IDLE, PENDING, APPROVED, REJECTED)
"""


# ===== Helper Functions =====


def record_login(success: bool, reason: str = ""):
    login_total.labels(status="success" if success else "failed").inc()
    if not success:
        login_failed.labels(reason=reason or "unknown").inc()


def record_registration(success: bool, reason: str = ""):
    registration_total.labels(status="success" if success else "failed").inc()
    if not success:
        registration_failed.labels(reason=reason or "unknown").inc()


def record_seller_status(status: str):
    seller_status_changes.labels(status=status).inc()
