"""
django-blog-api - JSON backend for a blog with accounts, images and reviews.

Features:
- Email-as-username accounts with confirmation and password reset
- Stateless JWT bearer authentication
- Blog posts with image sets stored in blob storage
- Threaded reviews with restrict/cascade delete rules
"""

__version__ = "0.1.0"
__author__ = "ITBrains"
