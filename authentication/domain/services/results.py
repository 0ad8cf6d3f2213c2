"""
Result objects for the authentication service layer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LoginResult:
    """Result of login attempt."""

    success: bool
    user: Optional[Any] = None  # CustomUser instance
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    message: Optional[str] = None


@dataclass
class RegisterResult:
    """Result of user registration attempt."""

    success: bool
    user: Optional[Any] = None  # CustomUser instance
    email_sent: bool = False
    error: Optional[str] = None
    error_code: Optional[str] = None
    message: Optional[str] = None


@dataclass
class Result:
    """Generic result for simple operations."""

    success: bool
    message: str = ""
    data: Optional[Dict[str, Any]] = field(default_factory=dict)
    error: Optional[str] = None
    error_code: Optional[str] = None
