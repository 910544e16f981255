"""
Review operations and the review forest.

Reviews are stored flat with a parent id. Children are materialized on
read by grouping one query's rows by parent id; nothing holds references
between review objects.
"""
import logging
from dataclasses import dataclass, field

from django.db import transaction
from django.db.models import RestrictedError

from .conf import api_settings
from .exceptions import DeleteRestricted, NotFound, Unauthorized, ValidationError
from .models import Blog, Review
from .validation import clean_id, clean_text

logger = logging.getLogger(__name__)


@dataclass
class ReviewNode:
    review: Review
    children: list = field(default_factory=list)


def build_forest(reviews):
    """
    Arrange ``reviews`` into top-level nodes with nested children.

    Reviews whose parent is not among ``reviews`` are treated as roots.
    Order within each level follows the input order.
    """
    nodes = {review.pk: ReviewNode(review) for review in reviews}
    roots = []
    for review in reviews:
        node = nodes[review.pk]
        parent = nodes.get(review.parent_id)
        if parent is None:
            roots.append(node)
        else:
            parent.children.append(node)
    return roots


def review_forest(blog_id):
    if not Blog.objects.filter(pk=blog_id).exists():
        raise NotFound("Blog not found.")
    reviews = list(Review.objects.filter(blog_id=blog_id).select_related("user"))
    return build_forest(reviews)


def add_review(user, blog_id, comment, parent_id=None):
    """Add a review, or a reply when ``parent_id`` is given."""
    comment = clean_text(comment, "Comment")
    parent_id = clean_id(parent_id, "Parent review id")

    blog = Blog.objects.filter(pk=blog_id).first()
    if blog is None:
        raise NotFound("Blog not found.")

    if not comment:
        raise ValidationError("Comment is required.")
    if len(comment) > api_settings.REVIEW_MAX_LENGTH:
        raise ValidationError(
            f"Comment is longer than {api_settings.REVIEW_MAX_LENGTH} characters."
        )

    parent = None
    if parent_id:
        parent = Review.objects.filter(pk=parent_id).first()
        if parent is None:
            raise NotFound("Parent review not found.")
        if parent.blog_id != blog.pk:
            raise ValidationError("Parent review belongs to another blog.")
        max_depth = api_settings.REVIEW_MAX_DEPTH
        if max_depth is not None and parent.thread_depth + 1 > max_depth:
            raise ValidationError(f"Replies may be nested at most {max_depth} levels.")

    with transaction.atomic():
        review = Review.objects.create(
            user=user,
            blog=blog,
            parent=parent,
            comment=comment,
        )
        blog.adjust_review_count(1)

    logger.info("User %s reviewed blog %s (review %s)", user.pk, blog.pk, review.pk)
    return review


def delete_review(user, review_id):
    """Delete one of ``user``'s reviews; refused while replies reference it."""
    review = Review.objects.filter(pk=review_id).first()
    if review is None:
        raise NotFound("Review not found.")
    if review.user_id != user.pk:
        raise Unauthorized("You do not have permission to delete this review.")

    try:
        with transaction.atomic():
            review.delete()
            Blog(pk=review.blog_id).adjust_review_count(-1)
    except RestrictedError:
        raise DeleteRestricted("Review has replies; delete them first.")
    logger.info("User %s deleted review %s", user.pk, review_id)
