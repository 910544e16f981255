"""
Configuration settings for django-blog-api.

Override these in your Django settings.py:

    BLOG_API = {
        'JWT_ISSUER': 'https://api.example.com',
        'JWT_AUDIENCE': 'https://app.example.com',
        'JWT_SIGNING_KEY': '...',
        'BLOB_BASE_URL': 'https://account.blob.core.windows.net/container/',
        ...
    }

Database, email backend, STORAGES and PASSWORD_RESET_TIMEOUT are regular
Django settings and are not duplicated here.
"""
from datetime import timedelta

from django.conf import settings

DEFAULTS = {
    # JWT bearer tokens
    "JWT_ISSUER": "blog-api",
    "JWT_AUDIENCE": "blog-api-clients",
    "JWT_SIGNING_KEY": None,  # falls back to SECRET_KEY
    "JWT_ALGORITHM": "HS256",
    "JWT_LIFETIME": timedelta(minutes=30),

    # Links sent by email point at the frontend
    "FRONTEND_URL": "http://localhost:5173",

    # Accounts
    "DEFAULT_PROFILE_IMAGE": "default",
    "CONCEAL_UNKNOWN_ACCOUNTS": False,

    # Blob storage
    "BLOB_STORAGE_ALIAS": "default",
    "BLOB_BASE_URL": "https://itbblogstorage.blob.core.windows.net/itbcontainer/",
    "ALLOWED_IMAGE_TYPES": ["image/jpeg", "image/png", "image/gif", "image/webp"],
    "ALLOWED_IMAGE_EXTENSIONS": [".jpg", ".jpeg", ".png", ".gif", ".webp"],
    "VERIFY_IMAGE_CONTENT": True,

    # Reviews
    "REVIEW_MAX_LENGTH": 5000,
    "REVIEW_MAX_DEPTH": None,
}


class BlogApiSettings:
    """
    Lazy settings object that reads from Django settings.

    Access via: from blog_api.conf import api_settings
    """

    def __getattr__(self, name):
        if name not in DEFAULTS:
            raise AttributeError(f"Invalid blog_api setting: {name}")

        user_settings = getattr(settings, "BLOG_API", {})
        return user_settings.get(name, DEFAULTS[name])

    @property
    def JWT_SIGNING_KEY(self):
        """Return the configured signing key, or SECRET_KEY when unset."""
        user_settings = getattr(settings, "BLOG_API", {})
        return user_settings.get("JWT_SIGNING_KEY") or settings.SECRET_KEY


api_settings = BlogApiSettings()
