"""
Shared fixtures for the blog_api test suite.
"""
import pytest
from django.core.files.storage import storages

from blog_api.jwt_auth import issue_token
from blog_api.models import Blog

from .utils import create_user


@pytest.fixture(autouse=True)
def blob_storage(settings):
    """Give every test an empty in-memory blob store."""
    settings.STORAGES = {
        "default": {"BACKEND": "django.core.files.storage.InMemoryStorage"},
        "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
    }
    return storages["default"]


@pytest.fixture
def user(db):
    """Create a confirmed test user."""
    return create_user("test@example.com", name="Test", surname="User")


@pytest.fixture
def other_user(db):
    return create_user("other@example.com", name="Other", surname="User")


@pytest.fixture
def blog(db, user):
    """Create a test blog owned by ``user``."""
    return Blog.objects.create(title="Test Blog", body="This is a test blog body.", owner=user)


@pytest.fixture
def auth_header(user):
    return f"Bearer {issue_token(user).token}"
