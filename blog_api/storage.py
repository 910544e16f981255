"""
Blob upload gate.

Files are checked against the image allow-list, then written to the storage
backend named by BLOB_STORAGE_ALIAS under a generated unique name. Public
URLs are built by appending that name to BLOB_BASE_URL.

Point the alias at any Django storage backend (local filesystem, S3, Azure
Blob via django-storages, ...) in the STORAGES setting.
"""
import logging
import os
import uuid

from django.core.files.storage import storages

from .conf import api_settings
from .exceptions import BadFileType

logger = logging.getLogger(__name__)


def get_blob_storage():
    return storages[api_settings.BLOB_STORAGE_ALIAS]


def file_extension(upload):
    """Return the lowercased extension of an uploaded file name."""
    return os.path.splitext(getattr(upload, "name", "") or "")[1].lower()


def _is_decodable_image(upload):
    """Check the bytes really are an image Pillow can parse."""
    from PIL import Image

    try:
        with Image.open(upload) as img:
            img.verify()
    except Exception:
        return False
    finally:
        upload.seek(0)
    return True


def is_image(upload):
    """
    Return True if ``upload`` is an accepted image.

    Both the extension and the declared content type must be on the
    allow-list.
    """
    if file_extension(upload) not in api_settings.ALLOWED_IMAGE_EXTENSIONS:
        return False
    content_type = (getattr(upload, "content_type", "") or "").lower()
    if content_type not in api_settings.ALLOWED_IMAGE_TYPES:
        return False
    if api_settings.VERIFY_IMAGE_CONTENT:
        return _is_decodable_image(upload)
    return True


def ensure_images(uploads):
    """Raise BadFileType unless every upload is an accepted image."""
    for upload in uploads:
        if not is_image(upload):
            logger.info("Rejected upload %r (%s)", upload.name, getattr(upload, "content_type", ""))
            raise BadFileType(f"This file type is not accepted: {upload.name}")


def upload_file(upload):
    """
    Store an accepted image and return its generated blob name.

    Raises BadFileType for anything outside the allow-list.
    """
    ensure_images([upload])
    name = f"{uuid.uuid4().hex}{file_extension(upload)}"
    upload.seek(0)
    stored_name = get_blob_storage().save(name, upload)
    logger.debug("Stored blob %s (%d bytes)", stored_name, upload.size or 0)
    return stored_name


def blob_url(name):
    return f"{api_settings.BLOB_BASE_URL}{name}"


def blob_name(url):
    """Return the blob name behind a URL built by blob_url, or None."""
    base = api_settings.BLOB_BASE_URL
    if not base or not url or not url.startswith(base):
        return None
    return url[len(base):] or None


def upload_files(uploads):
    """
    Store several images.

    Returns one dict per file with the original name, blob name and URL.
    Nothing is stored if any file is rejected.
    """
    ensure_images(uploads)
    results = []
    for upload in uploads:
        name = upload_file(upload)
        results.append({
            "fileName": upload.name,
            "blobName": name,
            "url": blob_url(name),
        })
    return results


def list_blobs():
    """Return the names of all stored blobs."""
    _, files = get_blob_storage().listdir("")
    return sorted(files)


def delete_blobs(names):
    """Remove blobs that no longer back any record."""
    storage = get_blob_storage()
    for name in names:
        storage.delete(name)
