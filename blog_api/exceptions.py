"""
Error taxonomy for django-blog-api.

Every error a service can raise derives from BlogApiError and carries the
HTTP status the views answer with.
"""


class BlogApiError(Exception):
    """Base class for all expected API failures."""

    status_code = 400
    default_message = "Bad request."

    def __init__(self, message=None, errors=None):
        self.message = message or self.default_message
        self.errors = list(errors or [])
        super().__init__(self.message)

    def as_dict(self):
        data = {"error": self.message}
        if self.errors:
            data["errors"] = self.errors
        return data


class ValidationError(BlogApiError):
    default_message = "Invalid input."


class PolicyViolation(ValidationError):
    default_message = "Password does not satisfy the password policy."


class BadFileType(BlogApiError):
    default_message = "This file type is not accepted."


class InvalidToken(BlogApiError):
    default_message = "Invalid or expired token."


class EmailNotConfirmed(BlogApiError):
    default_message = "Email not confirmed. Confirmation email has been sent."


class InvalidCredentials(BlogApiError):
    default_message = "Invalid login attempt."


class LockedOut(BlogApiError):
    default_message = "User account locked out."


class Unauthorized(BlogApiError):
    status_code = 401
    default_message = "Unauthorized."


class NotFound(BlogApiError):
    status_code = 404
    default_message = "Not found."


class DeleteRestricted(BlogApiError):
    status_code = 409
    default_message = "Entity is still referenced and cannot be deleted."


class EmailDeliveryError(BlogApiError):
    status_code = 500
    default_message = "Error sending email."


class InternalError(BlogApiError):
    status_code = 500
    default_message = "Internal server error."
