"""
Account emails: confirmation and password reset links.
"""
import logging
from urllib.parse import urlencode

from django.conf import settings
from django.core.mail import send_mail

from .conf import api_settings
from .exceptions import EmailDeliveryError
from .tokens import email_confirmation_token

logger = logging.getLogger(__name__)


def confirmation_link(user, token):
    query = urlencode({"userId": user.pk, "token": token})
    return f"{api_settings.FRONTEND_URL}/confirm-email?{query}"


def reset_link(user, token):
    query = urlencode({"email": user.email, "token": token})
    return f"{api_settings.FRONTEND_URL}/reset-password?{query}"


def _deliver(recipient, subject, html):
    try:
        send_mail(
            subject,
            html,
            getattr(settings, "DEFAULT_FROM_EMAIL", None),
            [recipient],
            html_message=html,
        )
    except Exception as exc:
        logger.warning("Sending %r to %s failed: %s", subject, recipient, exc)
        raise EmailDeliveryError(f"Error sending email. {exc}") from exc


def send_confirmation_email(user):
    """
    Generate a confirmation token for ``user`` and email the link.

    Returns the token so callers that already hold the user can hand it on.
    """
    token = email_confirmation_token.make_token(user)
    link = confirmation_link(user, token)
    _deliver(
        user.email,
        "Confirm your email",
        f"Please confirm your account by <a href='{link}'>clicking here</a>.",
    )
    return token


def send_password_reset_email(user, token):
    link = reset_link(user, token)
    _deliver(
        user.email,
        "Reset your password",
        f"Reset your password by <a href='{link}'>clicking here</a>.",
    )
