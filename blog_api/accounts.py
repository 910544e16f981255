"""
Account operations: registration, login, email confirmation, password reset
and the admin-facing user endpoints.
"""
import logging
from dataclasses import dataclass

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.contrib.auth.tokens import default_token_generator
from django.core import exceptions as django_exceptions
from django.core.validators import validate_email
from django.db import transaction
from django.db.models import Count, ProtectedError, RestrictedError

from . import emails, storage
from .conf import api_settings
from .exceptions import (
    DeleteRestricted,
    EmailNotConfirmed,
    InvalidCredentials,
    InvalidToken,
    LockedOut,
    NotFound,
    PolicyViolation,
    ValidationError,
)
from .jwt_auth import issue_token
from .models import Blog, Review
from .tokens import email_confirmation_token
from .validation import clean_text, raw_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Registration:
    user: object
    token: str


def _find_by_email(email):
    User = get_user_model()
    return User.objects.filter(email__iexact=clean_text(email, "Email")).first()


def register(email, password, name, surname):
    """
    Create an unconfirmed account and email its confirmation link.

    All input problems are collected into one ValidationError. If the email
    cannot be sent, EmailDeliveryError is raised but the account is kept.
    """
    User = get_user_model()
    email = clean_text(email, "Email")
    name = clean_text(name, "Name")
    surname = clean_text(surname, "Surname")
    password = raw_text(password, "Password")
    errors = []

    try:
        validate_email(email)
    except django_exceptions.ValidationError:
        errors.append(f"Email '{email}' is invalid.")
    else:
        if _find_by_email(email) is not None:
            errors.append(f"Email '{email}' is already taken.")

    user = User(
        username=email,
        email=email,
        name=name,
        surname=surname,
        image_url=api_settings.DEFAULT_PROFILE_IMAGE,
    )
    try:
        validate_password(password, user)
    except django_exceptions.ValidationError as exc:
        errors.extend(exc.messages)

    if errors:
        raise ValidationError("Registration failed.", errors)

    user.set_password(password)
    user.save()
    logger.info("Registered user %s (id=%s)", email, user.pk)

    token = emails.send_confirmation_email(user)
    return Registration(user=user, token=token)


def login(email, password, remember_me=False):
    """
    Check credentials and issue a JWT.

    An unconfirmed account gets a fresh confirmation email and
    EmailNotConfirmed, whatever the password.
    """
    password = raw_text(password, "Password")
    user = _find_by_email(email)
    if user is not None and not user.email_confirmed:
        emails.send_confirmation_email(user)
        logger.info("Login for unconfirmed user %s; confirmation re-sent", user.email)
        raise EmailNotConfirmed()

    if user is None or not user.check_password(password):
        logger.warning("Invalid login attempt for %s", email)
        raise InvalidCredentials()

    if not user.is_active:
        logger.warning("Login for locked out user %s", user.email)
        raise LockedOut()

    issued = issue_token(user)
    logger.info("Issued token %s for %s (remember_me=%s)", issued.jti, user.email, remember_me)
    return issued


def confirm_email(user_id, token):
    """Mark the account confirmed if ``token`` is valid for it."""
    if not user_id or not token or not isinstance(token, str):
        raise InvalidToken("Invalid email confirmation request.")

    User = get_user_model()
    try:
        user = User.objects.filter(pk=int(user_id)).first()
    except (TypeError, ValueError):
        user = None
    if user is None:
        raise InvalidToken("Invalid email confirmation request.")

    if not email_confirmation_token.check_token(user, token):
        raise InvalidToken("Error confirming your email.")

    user.email_confirmed = True
    user.save(update_fields=["email_confirmed"])
    logger.info("Confirmed email for %s", user.email)
    return user


def forgot_password(email):
    """
    Email a password reset link.

    Unknown addresses raise NotFound unless CONCEAL_UNKNOWN_ACCOUNTS is on,
    in which case unknown and unconfirmed accounts return silently.
    """
    user = _find_by_email(email)
    conceal = api_settings.CONCEAL_UNKNOWN_ACCOUNTS

    if user is None:
        if conceal:
            logger.info("Password reset requested for unknown %s", email)
            return
        raise NotFound("User not found.")

    if not user.email_confirmed:
        if conceal:
            return
        raise EmailNotConfirmed("Email not confirmed.")

    token = default_token_generator.make_token(user)
    emails.send_password_reset_email(user, token)
    logger.info("Password reset link sent to %s", user.email)


def reset_password(email, token, new_password, confirm_password):
    """Set a new password if ``token`` is a valid reset token for ``email``."""
    token = raw_text(token, "Token")
    new_password = raw_text(new_password, "Password")
    confirm_password = raw_text(confirm_password, "Confirm password")
    if new_password != confirm_password:
        raise ValidationError("Passwords do not match.")

    user = _find_by_email(email)
    if user is None or not token or not default_token_generator.check_token(user, token):
        raise InvalidToken()

    try:
        validate_password(new_password, user)
    except django_exceptions.ValidationError as exc:
        raise PolicyViolation(errors=exc.messages)

    user.set_password(new_password)
    user.save(update_fields=["password"])
    logger.info("Password reset for %s", user.email)
    return user


def list_users():
    return list(get_user_model().objects.all())


def get_user(user_id):
    user = get_user_model().objects.filter(pk=user_id).first()
    if user is None:
        raise NotFound("User Not Found")
    return user


def delete_user(user_id):
    """
    Delete an account and, by cascade, its reviews. Review counters of the
    affected blogs drop in the same transaction.

    Blocked while the user still owns blogs or while other users' replies
    hang off one of the user's reviews.
    """
    user = get_user(user_id)
    try:
        with transaction.atomic():
            per_blog = (
                Review.objects.filter(user=user)
                .order_by()
                .values("blog_id")
                .annotate(total=Count("pk"))
            )
            for row in per_blog:
                Blog(pk=row["blog_id"]).adjust_review_count(-row["total"])
            user.delete()
    except (ProtectedError, RestrictedError) as exc:
        raise DeleteRestricted(
            "User still owns content that other records depend on.",
            [str(obj) for obj in _blocking_objects(exc)],
        )
    logger.info("Deleted user id=%s", user_id)


def _blocking_objects(exc):
    return getattr(exc, "protected_objects", None) or getattr(exc, "restricted_objects", None) or []


def upload_profile_image(user_id, upload):
    """Store a new profile image for the user and return its URL."""
    user = get_user(user_id)
    name = storage.upload_file(upload)
    user.image_url = storage.blob_url(name)
    user.save(update_fields=["image_url"])
    return user.image_url
