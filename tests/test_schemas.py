# =============================================================================
# tests/test_schemas.py - Request/response schema tests
# =============================================================================

import pytest
from pydantic import ValidationError

from media_platform.schemas.category import CategoryUpdate
from media_platform.schemas.comment import CommentCreate
from media_platform.schemas.common import PaginationMeta, PaginationParams
from media_platform.schemas.content import ContentCreate, ContentResponse, ContentUpdate
from media_platform.schemas.rating import BulkStatsRequest, RatingCreate
from media_platform.schemas.user import UserCreate
from tests.conftest import make_content


# =============================================================================
# Pagination
# =============================================================================

class TestPagination:

    @pytest.mark.parametrize(
        "limit,offset,total,has_more",
        [
            (20, 0, 57, True),
            (20, 40, 57, False),
            (20, 37, 57, False),
            (20, 36, 57, True),
            (20, 100, 57, False),
            (20, 0, 0, False),
        ],
    )
    def test_has_more(self, limit, offset, total, has_more):
        meta = PaginationMeta.create(limit=limit, offset=offset, total=total)
        assert meta.has_more is has_more

    def test_defaults(self):
        params = PaginationParams()
        assert (params.limit, params.offset) == (20, 0)

    @pytest.mark.parametrize("limit,offset", [(0, 0), (101, 0), (20, -1)])
    def test_out_of_range_rejected(self, limit, offset):
        with pytest.raises(ValidationError):
            PaginationParams(limit=limit, offset=offset)


# =============================================================================
# Users
# =============================================================================

class TestUserCreate:

    def test_valid(self):
        user = UserCreate(username="jane_doe", email="jane@example.com", password="s3cret")
        assert user.username == "jane_doe"

    @pytest.mark.parametrize("username", ["ja", "jane doe", "jane-doe", "j" * 101])
    def test_bad_username(self, username):
        with pytest.raises(ValidationError):
            UserCreate(username=username, email="jane@example.com", password="s3cret")

    def test_bad_email(self):
        with pytest.raises(ValidationError):
            UserCreate(username="jane_doe", email="not-an-email", password="s3cret")

    def test_password_over_bcrypt_limit(self):
        with pytest.raises(ValidationError):
            UserCreate(username="jane_doe", email="jane@example.com", password="x" * 73)


# =============================================================================
# Content
# =============================================================================

class TestContentSchemas:

    def test_defaults(self):
        data = ContentCreate(title="Hello", body="World", category_id=1)
        assert data.type.value == "article"

    def test_blank_title_rejected(self):
        with pytest.raises(ValidationError):
            ContentCreate(title="   ", body="World", category_id=1)

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            ContentCreate(title="Hello", body="World", category_id=1, type="podcast")

    def test_response_from_orm_shaped_object(self):
        response = ContentResponse.model_validate(make_content(5, status="draft"))
        assert response.id == 5
        assert response.status.value == "draft"
        assert response.published_at is None
        assert response.genre is None

    def test_genre(self):
        data = ContentCreate(title="T", body="B", category_id=1, genre="  Jazz ")

        assert data.genre == "Jazz"
        assert ContentCreate(title="T", body="B", category_id=1, genre="   ").genre is None
        assert ContentResponse.model_validate(make_content(genre="jazz")).genre == "jazz"

    def test_genre_too_long(self):
        with pytest.raises(ValidationError):
            ContentCreate(title="T", body="B", category_id=1, genre="x" * 101)
        with pytest.raises(ValidationError):
            ContentUpdate(genre="x" * 101)


# =============================================================================
# Ratings, comments, categories
# =============================================================================

class TestOtherSchemas:

    def test_rating_value_must_be_one(self):
        assert RatingCreate(content_id=1).value == 1
        with pytest.raises(ValidationError):
            RatingCreate(content_id=1, value=2)

    def test_bulk_stats_bounds(self):
        with pytest.raises(ValidationError):
            BulkStatsRequest(content_ids=[])
        with pytest.raises(ValidationError):
            BulkStatsRequest(content_ids=list(range(1, 102)))

    def test_comment_body_length(self):
        with pytest.raises(ValidationError):
            CommentCreate(content_id=1, body="x" * 1001)

    def test_category_update_tracks_explicit_null_parent(self):
        """parent_id: null means detach, so it must survive exclude_unset."""
        changes = CategoryUpdate(parent_id=None).model_dump(exclude_unset=True)
        assert changes == {"parent_id": None}
