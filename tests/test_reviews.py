"""
Tests for reviews and the review forest.
"""
import pytest

from blog_api import reviews
from blog_api.exceptions import DeleteRestricted, NotFound, Unauthorized, ValidationError
from blog_api.models import Blog, Review


class TestBuildForest:
    def test_nesting(self, blog, user, other_user):
        root = Review.objects.create(blog=blog, user=user, comment="root")
        reply = Review.objects.create(blog=blog, user=other_user, comment="reply", parent=root)
        nested = Review.objects.create(blog=blog, user=user, comment="nested", parent=reply)
        second = Review.objects.create(blog=blog, user=other_user, comment="second")

        forest = reviews.review_forest(blog.pk)

        assert [node.review for node in forest] == [root, second]
        assert [node.review for node in forest[0].children] == [reply]
        assert [node.review for node in forest[0].children[0].children] == [nested]
        assert forest[1].children == []

    def test_orphans_become_roots(self, blog, user):
        root = Review.objects.create(blog=blog, user=user, comment="root")
        reply = Review.objects.create(blog=blog, user=user, comment="reply", parent=root)

        forest = reviews.build_forest([reply])

        assert [node.review for node in forest] == [reply]

    def test_other_blogs_excluded(self, blog, user):
        other_blog = Blog.objects.create(title="Other", body="B", owner=user)
        Review.objects.create(blog=other_blog, user=user, comment="elsewhere")

        assert reviews.review_forest(blog.pk) == []

    def test_missing_blog(self, db):
        with pytest.raises(NotFound):
            reviews.review_forest(999)


class TestAddReview:
    def test_add_review_counts(self, blog, other_user):
        review = reviews.add_review(other_user, blog.pk, "  Great post!  ")

        blog.refresh_from_db()
        assert review.comment == "Great post!"
        assert review.parent is None
        assert blog.review_count == 1

    def test_reply(self, blog, user, other_user):
        parent = reviews.add_review(other_user, blog.pk, "Question?")
        reply = reviews.add_review(user, blog.pk, "Answer.", parent_id=parent.pk)

        assert reply.parent == parent
        blog.refresh_from_db()
        assert blog.review_count == 2

    def test_reply_to_other_blog_rejected(self, blog, user):
        other_blog = Blog.objects.create(title="Other", body="B", owner=user)
        parent = reviews.add_review(user, other_blog.pk, "Elsewhere")

        with pytest.raises(ValidationError):
            reviews.add_review(user, blog.pk, "Reply", parent_id=parent.pk)

    def test_missing_parent(self, blog, user):
        with pytest.raises(NotFound):
            reviews.add_review(user, blog.pk, "Reply", parent_id=999)

    def test_missing_blog(self, user):
        with pytest.raises(NotFound):
            reviews.add_review(user, 999, "Hello")

    @pytest.mark.parametrize("parent_id", ["abc", [1], {"id": 1}, True])
    def test_malformed_parent_id(self, blog, user, parent_id):
        with pytest.raises(ValidationError):
            reviews.add_review(user, blog.pk, "Reply", parent_id=parent_id)

        blog.refresh_from_db()
        assert Review.objects.count() == 0
        assert blog.review_count == 0

    def test_numeric_string_parent_id(self, blog, user):
        parent = reviews.add_review(user, blog.pk, "Question?")
        reply = reviews.add_review(user, blog.pk, "Answer.", parent_id=str(parent.pk))

        assert reply.parent == parent

    @pytest.mark.parametrize("comment", [5, ["Hi"], {"text": "Hi"}])
    def test_non_string_comment(self, blog, user, comment):
        with pytest.raises(ValidationError):
            reviews.add_review(user, blog.pk, comment)
        assert Review.objects.count() == 0

    def test_empty_comment(self, blog, user):
        with pytest.raises(ValidationError):
            reviews.add_review(user, blog.pk, "   ")

    def test_comment_too_long(self, blog, user, settings):
        settings.BLOG_API = {**settings.BLOG_API, "REVIEW_MAX_LENGTH": 10}

        with pytest.raises(ValidationError):
            reviews.add_review(user, blog.pk, "x" * 11)

    def test_unlimited_depth_by_default(self, blog, user):
        parent = None
        for level in range(6):
            parent = reviews.add_review(user, blog.pk, f"level {level}", parent_id=parent and parent.pk)

        assert parent.thread_depth == 5

    def test_max_depth(self, blog, user, settings):
        settings.BLOG_API = {**settings.BLOG_API, "REVIEW_MAX_DEPTH": 1}
        root = reviews.add_review(user, blog.pk, "root")
        reply = reviews.add_review(user, blog.pk, "reply", parent_id=root.pk)

        with pytest.raises(ValidationError):
            reviews.add_review(user, blog.pk, "too deep", parent_id=reply.pk)


class TestDeleteReview:
    def test_delete_own_review(self, blog, other_user):
        review = reviews.add_review(other_user, blog.pk, "Oops")

        reviews.delete_review(other_user, review.pk)

        blog.refresh_from_db()
        assert not Review.objects.filter(pk=review.pk).exists()
        assert blog.review_count == 0

    def test_only_author_can_delete(self, blog, user, other_user):
        review = reviews.add_review(other_user, blog.pk, "Mine")

        with pytest.raises(Unauthorized):
            reviews.delete_review(user, review.pk)

    def test_delete_with_replies_is_restricted(self, blog, user, other_user):
        parent = reviews.add_review(other_user, blog.pk, "Parent")
        reviews.add_review(user, blog.pk, "Reply", parent_id=parent.pk)

        with pytest.raises(DeleteRestricted):
            reviews.delete_review(other_user, parent.pk)

        blog.refresh_from_db()
        assert blog.review_count == 2

    def test_delete_missing(self, user):
        with pytest.raises(NotFound):
            reviews.delete_review(user, 999)
