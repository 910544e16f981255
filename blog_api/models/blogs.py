"""
Blog and Image models for django-blog-api.
"""
from django.conf import settings
from django.db import models
from django.utils import timezone


class Blog(models.Model):
    """
    Blog post.

    Counters are denormalized and maintained out of band with F()
    updates; they are never recomputed from related rows.
    """

    title = models.CharField(max_length=255)
    body = models.TextField()
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="blogs",
    )
    like_count = models.PositiveIntegerField(default=0)
    view_count = models.PositiveIntegerField(default=0)
    review_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["owner", "-created_at"], name="blog_owner_created_idx"),
        ]

    def __str__(self):
        return self.title

    @property
    def preview(self):
        """Return truncated body for admin display."""
        if len(self.body) > 280:
            return self.body[:280] + "..."
        return self.body

    def increment_view_count(self):
        """Increment view count atomically."""
        Blog.objects.filter(pk=self.pk).update(view_count=models.F("view_count") + 1)

    def adjust_review_count(self, delta):
        """Shift the review counter by ``delta`` atomically, never below zero."""
        qs = Blog.objects.filter(pk=self.pk)
        if delta < 0:
            qs = qs.filter(review_count__gte=-delta)
        qs.update(review_count=models.F("review_count") + delta)


class Image(models.Model):
    """
    Image attached to a blog.

    The file itself lives in blob storage; only its public URL is kept.
    """

    image_url = models.CharField(max_length=500)
    blog = models.ForeignKey(
        Blog,
        on_delete=models.CASCADE,
        related_name="images",
    )
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return self.image_url
