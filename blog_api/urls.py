"""
URL configuration for django-blog-api.

Include in your project urls.py at the site root:

    path('', include('blog_api.urls')),
"""
from django.urls import path

from . import views

app_name = "blog_api"

urlpatterns = [
    # Accounts
    path("api/account/register", views.RegisterView.as_view(), name="register"),
    path("api/account/login", views.LoginView.as_view(), name="login"),
    path("api/account/confirm-email", views.ConfirmEmailView.as_view(), name="confirm_email"),
    path("api/account/logout", views.LogoutView.as_view(), name="logout"),
    path("api/account/me", views.MeView.as_view(), name="me"),
    path("api/account/forgot-password", views.ForgotPasswordView.as_view(), name="forgot_password"),
    path("api/account/reset-password", views.ResetPasswordView.as_view(), name="reset_password"),
    path("api/account", views.UserListView.as_view(), name="user_list"),
    path("api/account/<int:pk>", views.UserDetailView.as_view(), name="user_detail"),
    path(
        "api/account/<int:pk>/upload-profile-image",
        views.ProfileImageUploadView.as_view(),
        name="upload_profile_image",
    ),

    # Blogs
    path("api/blog", views.BlogListView.as_view(), name="blog_list"),
    path("api/blog/create", views.BlogCreateView.as_view(), name="blog_create"),
    path("api/blog/<int:pk>", views.BlogDetailView.as_view(), name="blog_detail"),
    path("api/blog/edit/<int:pk>", views.BlogEditView.as_view(), name="blog_edit"),

    # Reviews
    path("api/blog/<int:pk>/reviews", views.ReviewListView.as_view(), name="review_list"),
    path("api/review/<int:pk>", views.ReviewDetailView.as_view(), name="review_detail"),

    # Blob storage
    path("blog/azureblob", views.BlobView.as_view(), name="blobs"),
]
