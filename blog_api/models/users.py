"""
User model for django-blog-api.
"""
from django.contrib.auth.models import AbstractUser
from django.db import models

from ..conf import api_settings


def default_profile_image():
    return api_settings.DEFAULT_PROFILE_IMAGE


class User(AbstractUser):
    """
    Account holder.

    The email address is the login name: it is mirrored into ``username``
    at registration so Django's auth machinery and the JWT subject agree.
    """

    email = models.EmailField(unique=True)
    name = models.CharField(max_length=150, blank=True)
    surname = models.CharField(max_length=150, blank=True)
    image_url = models.CharField(max_length=500, default=default_profile_image)
    email_confirmed = models.BooleanField(
        default=False,
        help_text="Set once the user follows the confirmation link",
    )

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return self.email or self.username

    @property
    def full_name(self):
        return f"{self.name} {self.surname}".strip()
