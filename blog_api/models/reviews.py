"""
Review model for django-blog-api.
"""
from django.conf import settings
from django.db import models
from django.utils import timezone

from ..conf import api_settings


class Review(models.Model):
    """
    Comment on a blog, optionally replying to another review.

    Delete rules:
    - deleting the author cascades to their reviews
    - a blog cannot be deleted while reviews reference it
    - a review cannot be deleted while replies reference it, unless the
      replies go away in the same cascade
    """

    comment = models.TextField(max_length=api_settings.REVIEW_MAX_LENGTH)
    date = models.DateTimeField(default=timezone.now, db_index=True)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="reviews",
    )
    blog = models.ForeignKey(
        "blog_api.Blog",
        on_delete=models.RESTRICT,
        related_name="reviews",
    )
    parent = models.ForeignKey(
        "self",
        null=True,
        blank=True,
        on_delete=models.RESTRICT,
        related_name="replies",
    )

    class Meta:
        ordering = ["date", "id"]
        indexes = [
            models.Index(fields=["blog", "date"], name="review_blog_date_idx"),
        ]

    def __str__(self):
        return f"Review by {self.user} on {self.blog}"

    @property
    def preview(self):
        """Return truncated comment for admin display."""
        if len(self.comment) > 100:
            return self.comment[:100] + "..."
        return self.comment

    @property
    def is_reply(self):
        return self.parent_id is not None

    @property
    def thread_depth(self):
        """Calculate nesting depth of this review."""
        depth = 0
        current = self.parent
        while current:
            depth += 1
            current = current.parent
        return depth
