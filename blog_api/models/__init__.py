"""
Models for django-blog-api.

All models are importable from blog_api.models:

    from blog_api.models import User, Blog, Image, Review
"""
from .users import User
from .blogs import Blog, Image
from .reviews import Review

__all__ = [
    # Accounts
    "User",
    # Blogs
    "Blog",
    "Image",
    # Reviews
    "Review",
]
