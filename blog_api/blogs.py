"""
Blog operations.

Create and edit are single units of work: every file is validated before
anything is written, then the blog row and its images are written inside one
transaction. Blobs uploaded by a rolled-back unit of work are deleted. Blobs
behind replaced or deleted images are removed once the change commits.
"""
import logging

from django.db import transaction
from django.db.models import RestrictedError
from django.utils import timezone

from . import storage
from .exceptions import (
    BlogApiError,
    DeleteRestricted,
    InternalError,
    NotFound,
    Unauthorized,
    ValidationError,
)
from .models import Blog, Image
from .validation import clean_text

logger = logging.getLogger(__name__)


def _clean_content(title, body):
    title = clean_text(title, "Title")
    body = clean_text(body, "Body")
    errors = []
    if not title:
        errors.append("Title is required.")
    if not body:
        errors.append("Body is required.")
    if errors:
        raise ValidationError("Invalid blog.", errors)
    return title, body


def _blog_queryset():
    return Blog.objects.select_related("owner").prefetch_related("images", "reviews")


def list_blogs():
    return list(_blog_queryset())


def get_blog(blog_id):
    blog = _blog_queryset().filter(pk=blog_id).first()
    if blog is None:
        raise NotFound("Blog not found.")
    return blog


def _attach_images(blog, uploads, uploaded):
    for upload in uploads:
        name = storage.upload_file(upload)
        uploaded.append(name)
        Image.objects.create(blog=blog, image_url=storage.blob_url(name))


def _discard(names):
    try:
        storage.delete_blobs(names)
    except Exception:
        logger.exception("Could not remove blobs %s", names)


def _discard_on_commit(blog):
    """Schedule removal of the blobs behind ``blog``'s current images."""
    urls = blog.images.values_list("image_url", flat=True)
    names = [name for name in map(storage.blob_name, urls) if name]
    if names:
        transaction.on_commit(lambda: _discard(names))


def create_blog(user, title, body, uploads=()):
    """Create a blog owned by ``user`` with one Image per upload."""
    title, body = _clean_content(title, body)
    uploads = list(uploads or [])
    storage.ensure_images(uploads)

    uploaded = []
    try:
        with transaction.atomic():
            now = timezone.now()
            blog = Blog.objects.create(
                owner=user,
                title=title,
                body=body,
                created_at=now,
                updated_at=now,
            )
            _attach_images(blog, uploads, uploaded)
    except BlogApiError:
        _discard(uploaded)
        raise
    except Exception as exc:
        _discard(uploaded)
        logger.exception("An error occurred while creating the blog.")
        raise InternalError() from exc

    logger.info("User %s created blog %s with %d images", user.pk, blog.pk, len(uploads))
    return get_blog(blog.pk)


def edit_blog(user, blog_id, title, body, uploads=()):
    """
    Update a blog owned by ``user`` and replace its image set.

    The existing images are deleted and the uploads inserted in their
    place; there is no merge.
    """
    blog = Blog.objects.filter(pk=blog_id).first()
    if blog is None:
        raise NotFound("Blog not found.")
    if blog.owner_id != user.pk:
        raise Unauthorized("You do not have permission to edit this blog.")

    title, body = _clean_content(title, body)
    uploads = list(uploads or [])
    storage.ensure_images(uploads)

    uploaded = []
    try:
        with transaction.atomic():
            blog.title = title
            blog.body = body
            blog.updated_at = timezone.now()
            blog.save(update_fields=["title", "body", "updated_at"])

            _discard_on_commit(blog)
            blog.images.all().delete()
            _attach_images(blog, uploads, uploaded)
    except BlogApiError:
        _discard(uploaded)
        raise
    except Exception as exc:
        _discard(uploaded)
        logger.exception("An error occurred while editing the blog.")
        raise InternalError() from exc

    logger.info("User %s edited blog %s", user.pk, blog.pk)
    return get_blog(blog.pk)


def delete_blog(blog_id):
    """Delete a blog and its images; refused while reviews reference it."""
    blog = Blog.objects.filter(pk=blog_id).first()
    if blog is None:
        raise NotFound("Blog not found.")
    try:
        with transaction.atomic():
            _discard_on_commit(blog)
            blog.delete()
    except RestrictedError:
        raise DeleteRestricted("Blog still has reviews; delete them first.")
    logger.info("Deleted blog %s", blog_id)
