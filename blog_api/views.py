"""
JSON views for django-blog-api.

Every view derives from ApiView, which exempts it from CSRF (clients send
bearer tokens, not cookies) and turns BlogApiError into a JSON error body.
"""
import json

from django.http import JsonResponse, QueryDict
from django.utils.datastructures import MultiValueDict
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from . import accounts, blogs, reviews, storage
from .exceptions import BlogApiError, Unauthorized, ValidationError
from .jwt_auth import authenticate_header
from .serializers import (
    serialize_blog,
    serialize_review,
    serialize_review_node,
    serialize_user,
)


def message(text, status=200, **extra):
    return JsonResponse({"message": text, **extra}, status=status)


@method_decorator(csrf_exempt, name="dispatch")
class ApiView(View):
    """Base view: JSON errors and request helpers."""

    def dispatch(self, request, *args, **kwargs):
        try:
            return super().dispatch(request, *args, **kwargs)
        except BlogApiError as exc:
            return JsonResponse(exc.as_dict(), status=exc.status_code)

    def json_body(self):
        if not self.request.body:
            return {}
        try:
            data = json.loads(self.request.body)
        except (TypeError, ValueError):
            raise ValidationError("Request body must be valid JSON.")
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object.")
        return data

    def form_data(self):
        """Return (data, files) for POST as well as PUT requests."""
        request = self.request
        if request.method == "POST":
            return request.POST, request.FILES
        content_type = request.META.get("CONTENT_TYPE", "")
        if content_type.startswith("multipart/form-data"):
            return request.parse_file_upload(request.META, request)
        return QueryDict(request.body, encoding=request.encoding), MultiValueDict()

    def bearer_user(self):
        return authenticate_header(self.request.headers.get("Authorization"))


# Accounts


class RegisterView(ApiView):
    def post(self, request):
        data = self.json_body()
        registration = accounts.register(
            data.get("email"),
            data.get("password"),
            data.get("name"),
            data.get("surname"),
        )
        return message("Register is successfully", userId=registration.user.pk)


class LoginView(ApiView):
    def post(self, request):
        data = self.json_body()
        issued = accounts.login(
            data.get("email"),
            data.get("password"),
            bool(data.get("rememberMe", False)),
        )
        return JsonResponse({
            "token": issued.token,
            "expiresAt": issued.expires_at.isoformat(),
        })


class ConfirmEmailView(ApiView):
    def get(self, request):
        accounts.confirm_email(request.GET.get("userId"), request.GET.get("token"))
        return message("Email confirmed successfully.")


class LogoutView(ApiView):
    """Tokens are stateless; clients drop theirs."""

    def post(self, request):
        return message("Logout")


class MeView(ApiView):
    def get(self, request):
        user = self.bearer_user()
        return JsonResponse({"userName": user.get_username(), "email": user.email})


class UserListView(ApiView):
    def get(self, request):
        return JsonResponse([serialize_user(u) for u in accounts.list_users()], safe=False)


class UserDetailView(ApiView):
    def get(self, request, pk):
        return JsonResponse(serialize_user(accounts.get_user(pk)))

    def delete(self, request, pk):
        if not self.bearer_user().is_staff:
            raise Unauthorized("Only administrators can delete users.")
        accounts.delete_user(pk)
        return message("User deleted successfully")


class ProfileImageUploadView(ApiView):
    def post(self, request, pk):
        user = self.bearer_user()
        if user.pk != pk and not user.is_staff:
            raise Unauthorized("You can only change your own profile image.")
        upload = request.FILES.get("file")
        if upload is None:
            raise ValidationError("A file is required.")
        url = accounts.upload_profile_image(pk, upload)
        return JsonResponse({"imageUrl": url})


class ForgotPasswordView(ApiView):
    def post(self, request):
        accounts.forgot_password(self.json_body().get("email"))
        return message("Password reset link has been sent to your email.")


class ResetPasswordView(ApiView):
    def post(self, request):
        data = self.json_body()
        accounts.reset_password(
            data.get("email"),
            data.get("token"),
            data.get("password"),
            data.get("confirmPassword"),
        )
        return message("Password has been reset successfully.")


# Blogs


class BlogCreateMixin:
    def create(self):
        user = self.bearer_user()
        data, files = self.form_data()
        blog = blogs.create_blog(
            user,
            data.get("title"),
            data.get("body"),
            files.getlist("imgFiles"),
        )
        return JsonResponse(serialize_blog(blog), status=201)


class BlogEditMixin:
    def edit(self, blog_id):
        user = self.bearer_user()
        data, files = self.form_data()
        blog = blogs.edit_blog(
            user,
            blog_id,
            data.get("title"),
            data.get("body"),
            files.getlist("imgFiles"),
        )
        return JsonResponse(serialize_blog(blog))


class BlogListView(BlogCreateMixin, ApiView):
    def get(self, request):
        return JsonResponse([serialize_blog(b) for b in blogs.list_blogs()], safe=False)

    def post(self, request):
        return self.create()


class BlogCreateView(BlogCreateMixin, ApiView):
    def post(self, request):
        return self.create()


class BlogDetailView(BlogEditMixin, ApiView):
    def get(self, request, pk):
        blog = blogs.get_blog(pk)
        blog.increment_view_count()
        blog.view_count += 1
        return JsonResponse(serialize_blog(blog))

    def put(self, request, pk):
        return self.edit(pk)

    def delete(self, request, pk):
        blogs.delete_blog(pk)
        return message("Removed")


class BlogEditView(BlogEditMixin, ApiView):
    def put(self, request, pk):
        return self.edit(pk)


# Reviews


class ReviewListView(ApiView):
    def get(self, request, pk):
        forest = reviews.review_forest(pk)
        return JsonResponse([serialize_review_node(node) for node in forest], safe=False)

    def post(self, request, pk):
        user = self.bearer_user()
        data = self.json_body()
        review = reviews.add_review(
            user,
            pk,
            data.get("comment"),
            data.get("parentReviewId"),
        )
        return JsonResponse(serialize_review(review), status=201)


class ReviewDetailView(ApiView):
    def delete(self, request, pk):
        reviews.delete_review(self.bearer_user(), pk)
        return message("Removed")


# Blob storage


class BlobView(ApiView):
    def get(self, request):
        return JsonResponse(storage.list_blobs(), safe=False)

    def post(self, request):
        files = request.FILES.getlist("files")
        if not files:
            raise ValidationError("At least one file is required.")
        return JsonResponse(storage.upload_files(files), safe=False)
