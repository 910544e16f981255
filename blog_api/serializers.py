"""
Plain-dict renderings of models for JSON responses.
"""


def _iso(value):
    return value.isoformat() if value else None


def serialize_user(user):
    return {
        "id": user.pk,
        "userName": user.get_username(),
        "email": user.email,
        "name": user.name,
        "surname": user.surname,
        "imageUrl": user.image_url,
        "emailConfirmed": user.email_confirmed,
    }


def serialize_image(image):
    return {
        "id": image.pk,
        "imageUrl": image.image_url,
        "blogId": image.blog_id,
        "isActive": image.is_active,
    }


def serialize_review(review):
    return {
        "id": review.pk,
        "comment": review.comment,
        "date": _iso(review.date),
        "appUserId": review.user_id,
        "blogId": review.blog_id,
        "parentReviewId": review.parent_id,
    }


def serialize_review_node(node):
    data = serialize_review(node.review)
    data["author"] = node.review.user.get_username()
    data["reviews"] = [serialize_review_node(child) for child in node.children]
    return data


def serialize_blog(blog):
    owner = blog.owner
    return {
        "id": blog.pk,
        "title": blog.title,
        "body": blog.body,
        "createdAt": _iso(blog.created_at),
        "updatedAt": _iso(blog.updated_at),
        "likeCount": blog.like_count,
        "viewCount": blog.view_count,
        "reviewCount": blog.review_count,
        "appUserId": blog.owner_id,
        "appUser": {
            "id": owner.pk,
            "name": owner.name,
            "surname": owner.surname,
            "imageUrl": owner.image_url,
        },
        "images": [serialize_image(image) for image in blog.images.all()],
        "reviews": [serialize_review(review) for review in blog.reviews.all()],
    }
