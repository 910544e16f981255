"""
One-time token generators for account flows.
"""
from django.contrib.auth.tokens import PasswordResetTokenGenerator


class EmailConfirmationTokenGenerator(PasswordResetTokenGenerator):
    """
    Token for the email confirmation link.

    The confirmed flag is part of the hash, so a token stops validating
    once it has been used. Expiry follows PASSWORD_RESET_TIMEOUT.
    """

    key_salt = "blog_api.tokens.EmailConfirmationTokenGenerator"

    def _make_hash_value(self, user, timestamp):
        return f"{user.pk}{user.email}{user.email_confirmed}{timestamp}"


email_confirmation_token = EmailConfirmationTokenGenerator()
