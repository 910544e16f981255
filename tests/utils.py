"""
Helpers shared by the blog_api tests.
"""
import io
import re
from urllib.parse import parse_qs, urlparse

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image as PILImage


def make_image(name="photo.png", fmt="PNG", content_type="image/png"):
    """Return an upload holding a real, tiny image."""
    buffer = io.BytesIO()
    PILImage.new("RGB", (4, 4), "red").save(buffer, format=fmt)
    return SimpleUploadedFile(name, buffer.getvalue(), content_type=content_type)


def make_text_file(name="notes.txt", content_type="text/plain"):
    return SimpleUploadedFile(name, b"not an image", content_type=content_type)


def link_params(message):
    """Extract the query parameters of the link in an account email."""
    href = re.search(r"href='([^']+)'", message.body).group(1)
    return {key: values[0] for key, values in parse_qs(urlparse(href).query).items()}


def create_user(email, password="Secret1!", confirmed=True, **extra):
    return get_user_model().objects.create_user(
        username=email,
        email=email,
        password=password,
        email_confirmed=confirmed,
        **extra,
    )
