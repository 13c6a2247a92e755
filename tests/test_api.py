# =============================================================================
# tests/test_api.py - HTTP API tests
# =============================================================================
# Routes run against the real app; services that would touch PostgreSQL are
# replaced through dependency overrides.
# =============================================================================

from datetime import timedelta
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from media_platform.api.dependencies.services import (
    get_auth_service,
    get_bookmark_service,
    get_comment_service,
    get_content_service,
    get_follow_service,
    get_rating_service,
    get_stats_service,
    get_user_service,
)
from media_platform.services import (
    AuthService,
    BookmarkService,
    CommentService,
    ContentService,
    FollowService,
    RatingService,
    StatsService,
    UserService,
)
from tests.conftest import (
    NOW,
    make_comment,
    make_content,
    make_orm_content,
    make_token,
    make_user,
    mock_repo,
)


def _error(response):
    return response.json()["error"]


# =============================================================================
# Health & framework errors
# =============================================================================

class TestHealth:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["version"] == "1.0.0"

    def test_ready_reports_unavailable_database(self, client, monkeypatch):
        async def down():
            return False

        monkeypatch.setattr("media_platform.api.handlers.health_handler.check_db", down)
        response = client.get("/ready")

        assert response.status_code == 503
        assert response.json() == {"status": "not_ready", "database": "unavailable"}

    def test_ready(self, client, monkeypatch):
        async def up():
            return True

        monkeypatch.setattr("media_platform.api.handlers.health_handler.check_db", up)
        response = client.get("/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    def test_request_id_header(self, client):
        response = client.get("/health", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"

    def test_request_id_generated(self, client):
        assert client.get("/health").headers.get("X-Request-ID")

    def test_unknown_route_uses_envelope(self, client):
        response = client.get("/api/nothing-here")

        assert response.status_code == 404
        assert _error(response)["code"] == "NOT_FOUND"

    def test_unexpected_error_is_500_envelope(self, app, override):
        service = ContentService(MagicMock())
        service.repo = mock_repo()
        service.repo.list_published.side_effect = RuntimeError("boom")
        override(get_content_service, service)

        response = TestClient(app, raise_server_exceptions=False).get("/api/contents/published")

        assert response.status_code == 500
        assert _error(response) == {
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
            "details": {},
        }


# =============================================================================
# Authentication & authorization
# =============================================================================

class TestAuth:

    def test_missing_token(self, client):
        response = client.get("/api/users/me")

        assert response.status_code == 401
        assert _error(response)["code"] == "AUTHENTICATION_ERROR"

    def test_garbage_token(self, client):
        response = client.get("/api/users/me", headers={"Authorization": "Bearer nonsense"})

        assert response.status_code == 401
        assert _error(response)["message"].startswith("Invalid token")

    def test_expired_token(self, client):
        token = make_token(expires_in=timedelta(seconds=-5))
        response = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert _error(response)["message"] == "Token has expired"

    def test_non_admin_cannot_list_users(self, client, user_headers):
        response = client.get("/api/users", headers=user_headers)

        assert response.status_code == 403
        assert _error(response)["code"] == "AUTHORIZATION_ERROR"

    def test_non_admin_cannot_refresh_stats(self, client, user_headers):
        response = client.post("/api/admin/stats/refresh", headers=user_headers)
        assert response.status_code == 403

    def test_admin_lists_users(self, client, override, admin_headers):
        service = UserService(MagicMock())
        service.repo = mock_repo(list_public=[make_user(), make_user(2, "bob", "bob@example.com")], count=2)
        override(get_user_service, service)

        response = client.get("/api/users?limit=10", headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        assert [user["email"] for user in body["data"]] == ["alice@example.com", "bob@example.com"]
        assert body["pagination"] == {"limit": 10, "offset": 0, "total": 2, "has_more": False}

    def test_admin_refreshes_stats(self, client, override, admin_headers):
        views = ["like_stats", "user_follow_stats", "following_feed_contents"]
        service = StatsService(MagicMock())
        service.repo = mock_repo(refresh=views)
        override(get_stats_service, service)

        response = client.post("/api/admin/stats/refresh", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"refreshed": views}
        service.repo.refresh.assert_awaited_once()

    def test_me(self, client, override, user_headers):
        service = UserService(MagicMock())
        service.repo = mock_repo(get=make_user())
        override(get_user_service, service)

        response = client.get("/api/users/me", headers=user_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["username"] == "alice"
        assert "password_hash" not in body

    def test_register(self, client, override):
        service = AuthService(MagicMock())
        service.repo = mock_repo(email_exists=False, username_exists=False, create=make_user(7, "jane_doe"))
        override(get_auth_service, service)

        response = client.post(
            "/api/users/register",
            json={"username": "jane_doe", "email": "jane@example.com", "password": "s3cret"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["user"]["id"] == 7
        assert body["token_type"] == "bearer"
        assert body["access_token"]

    def test_register_duplicate_email(self, client, override):
        service = AuthService(MagicMock())
        service.repo = mock_repo(email_exists=True)
        override(get_auth_service, service)

        response = client.post(
            "/api/users/register",
            json={"username": "jane_doe", "email": "jane@example.com", "password": "s3cret"},
        )

        assert response.status_code == 409
        assert _error(response)["code"] == "CONFLICT"

    def test_register_invalid_body(self, client):
        response = client.post(
            "/api/users/register",
            json={"username": "x", "email": "nope", "password": "s3cret"},
        )

        assert response.status_code == 400
        error = _error(response)
        assert error["code"] == "VALIDATION_ERROR"
        assert {tuple(e["loc"]) for e in error["details"]["errors"]} >= {
            ("body", "username"),
            ("body", "email"),
        }

    def test_login_bad_credentials(self, client, override):
        service = AuthService(MagicMock())
        service.repo = mock_repo(get_by_email=make_user())
        override(get_auth_service, service)

        response = client.post("/api/users/login", json={"email": "alice@example.com", "password": "wrong"})

        assert response.status_code == 401
        assert _error(response)["message"] == "Invalid email or password"


# =============================================================================
# Pagination & query validation
# =============================================================================

class TestPaginationParams:

    @pytest.mark.parametrize("query", ["limit=0", "limit=101", "offset=-1", "limit=abc"])
    def test_out_of_range_is_400(self, client, query):
        response = client.get(f"/api/contents/published?{query}")

        assert response.status_code == 400
        assert _error(response)["code"] == "VALIDATION_ERROR"

    def test_trending_limit_capped_at_50(self, client):
        response = client.get("/api/contents/trending?limit=51")
        assert response.status_code == 400

    def test_pagination_meta(self, client, override):
        service = ContentService(MagicMock())
        service.repo = mock_repo(list_published=([make_content(1), make_content(2)], 57))
        override(get_content_service, service)

        response = client.get("/api/contents/published?limit=2&offset=4")

        assert response.status_code == 200
        body = response.json()
        assert len(body["data"]) == 2
        assert body["pagination"] == {"limit": 2, "offset": 4, "total": 57, "has_more": True}

    def test_offset_past_the_end(self, client, override):
        service = ContentService(MagicMock())
        service.repo = mock_repo(list_published=([], 57))
        override(get_content_service, service)

        response = client.get("/api/contents/published?limit=20&offset=100")

        assert response.status_code == 200
        body = response.json()
        assert body["data"] == []
        assert body["pagination"] == {"limit": 20, "offset": 100, "total": 57, "has_more": False}
        service.repo.list_published.assert_awaited_once_with(offset=100, limit=20)


# =============================================================================
# Content
# =============================================================================

class TestContentRoutes:

    def test_trending(self, client, override):
        service = ContentService(MagicMock())
        service.repo = mock_repo(
            trending_candidates=[
                make_content(1, view_count=5, published_at=NOW),
                make_content(2, view_count=5000, published_at=NOW),
            ]
        )
        override(get_content_service, service)

        response = client.get("/api/contents/trending?limit=1")

        assert response.status_code == 200
        body = response.json()
        assert [item["id"] for item in body] == [2]
        assert body[0]["trending_score"] >= 3

    def test_search_response_shape(self, client, override):
        service = ContentService(MagicMock())
        service.repo = mock_repo(search=[(make_content(3), 61.5)])
        override(get_content_service, service)

        response = client.get("/api/contents/search?q=postgres")

        assert response.status_code == 200
        body = response.json()
        assert body["query"] == "postgres"
        assert body["data"][0]["relevance_score"] == 61.5
        assert (body["limit"], body["offset"]) == (20, 0)

    def test_draft_is_404_for_anonymous(self, client, override):
        service = ContentService(MagicMock())
        service.repo = mock_repo(get=make_orm_content(5, author_id=2, status="draft"))
        override(get_content_service, service)

        response = client.get("/api/contents/5")

        assert response.status_code == 404
        assert _error(response)["message"] == "Content with id '5' not found"

    def test_genre_filter(self, client, override):
        service = ContentService(MagicMock())
        service.repo = mock_repo(list_filtered=([make_content(1, genre="jazz")], 1))
        override(get_content_service, service)

        response = client.get("/api/contents?genre=jazz")

        assert response.status_code == 200
        assert response.json()["data"][0]["genre"] == "jazz"
        assert service.repo.list_filtered.await_args.kwargs["genre"] == "jazz"

    def test_genre_filter_too_long(self, client):
        response = client.get(f"/api/contents?genre={'x' * 101}")
        assert response.status_code == 400

    def test_create_requires_auth(self, client):
        response = client.post("/api/contents", json={"title": "T", "body": "B", "category_id": 1})
        assert response.status_code == 401

    def test_create_rejects_unknown_status(self, client, user_headers):
        response = client.post(
            "/api/contents",
            json={"title": "T", "body": "B", "category_id": 1, "status": "deleted"},
            headers=user_headers,
        )
        assert response.status_code == 400


# =============================================================================
# Social
# =============================================================================

class TestSocialRoutes:

    def test_self_follow_is_400(self, client, override, user_headers):
        service = FollowService(MagicMock())
        service.repo = mock_repo()
        service.user_repo = mock_repo(exists=True)
        override(get_follow_service, service)

        response = client.post("/api/follows", json={"following_id": 1}, headers=user_headers)

        assert response.status_code == 400
        assert _error(response)["message"] == "You cannot follow yourself"

    def test_follow(self, client, override, user_headers):
        service = FollowService(MagicMock())
        service.repo = mock_repo(
            is_following=False,
            create=SimpleNamespace(id=11, follower_id=1, following_id=2, created_at=NOW),
        )
        service.user_repo = mock_repo(exists=True)
        override(get_follow_service, service)

        response = client.post("/api/follows", json={"following_id": 2}, headers=user_headers)

        assert response.status_code == 201
        assert response.json()["following_id"] == 2

    def test_duplicate_follow_is_409(self, client, override, user_headers):
        service = FollowService(MagicMock())
        service.repo = mock_repo(is_following=True)
        service.user_repo = mock_repo(exists=True)
        override(get_follow_service, service)

        response = client.post("/api/follows", json={"following_id": 2}, headers=user_headers)

        assert response.status_code == 409

    def test_toggle_like(self, client, override, user_headers):
        service = RatingService(MagicMock())
        service.repo = mock_repo(get_user_rating=None, count_for_content=1)
        service.content_repo = mock_repo(get=make_orm_content(42))
        override(get_rating_service, service)

        response = client.post("/api/ratings/toggle/42", headers=user_headers)

        assert response.status_code == 200
        assert response.json() == {"content_id": 42, "liked": True, "like_count": 1}

    def test_bulk_stats(self, client, override):
        service = RatingService(MagicMock())
        service.repo = mock_repo(counts_for_contents={42: 17})
        override(get_rating_service, service)

        response = client.post("/api/ratings/bulk-stats", json={"content_ids": [42, 43]})

        assert response.status_code == 200
        assert response.json() == {"stats": {"42": 17, "43": 0}}

    def test_bookmark_status(self, client, override, user_headers):
        service = BookmarkService(MagicMock())
        service.repo = mock_repo(get_user_bookmark=SimpleNamespace(id=3))
        override(get_bookmark_service, service)

        response = client.get("/api/bookmarks/status/42", headers=user_headers)

        assert response.status_code == 200
        assert response.json() == {"content_id": 42, "bookmarked": True}


# =============================================================================
# Unpublished content behind nested routes
# =============================================================================

class TestDraftVisibility:
    """Content 5 is a draft owned by user 2."""

    NOT_FOUND = "Content with id '5' not found"

    @pytest.fixture
    def draft(self):
        return make_orm_content(5, author_id=2, status="draft")

    @pytest.fixture
    def comments(self, override, draft):
        service = CommentService(MagicMock())
        service.repo = mock_repo(
            get=make_comment(7, user_id=2, content_id=5),
            list_roots=([], 0),
            list_replies_for={},
            list_replies=([], 0),
        )
        service.content_repo = mock_repo(get=draft)
        return override(get_comment_service, service)

    @pytest.fixture
    def ratings(self, override, draft):
        service = RatingService(MagicMock())
        service.repo = mock_repo(get_user_rating=None, count_for_content=1, list_by_content=([], 0))
        service.content_repo = mock_repo(get=draft)
        return override(get_rating_service, service)

    @pytest.fixture
    def bookmarks(self, override, draft):
        service = BookmarkService(MagicMock())
        service.repo = mock_repo(get_user_bookmark=None, create=SimpleNamespace(id=8))
        service.content_repo = mock_repo(get=draft)
        return override(get_bookmark_service, service)

    @pytest.mark.parametrize(
        "path",
        ["/api/contents/5/comments", "/api/comments/7", "/api/comments/7/replies"],
    )
    def test_comments_hidden_from_anonymous(self, client, comments, path):
        response = client.get(path)

        assert response.status_code == 404
        assert _error(response)["message"] == self.NOT_FOUND

    def test_comments_visible_to_author(self, client, comments, other_user_headers):
        response = client.get("/api/contents/5/comments", headers=other_user_headers)

        assert response.status_code == 200
        assert response.json()["data"] == []

    def test_stranger_cannot_comment(self, client, comments, user_headers):
        response = client.post("/api/comments", json={"content_id": 5, "body": "Hi"}, headers=user_headers)

        assert response.status_code == 404
        comments.repo.create.assert_not_awaited()

    @pytest.mark.parametrize("path", ["/api/contents/5/ratings", "/api/contents/5/ratings/stats"])
    def test_ratings_hidden_from_anonymous(self, client, ratings, path):
        response = client.get(path)

        assert response.status_code == 404
        assert _error(response)["message"] == self.NOT_FOUND

    def test_stranger_cannot_like(self, client, ratings, user_headers):
        toggle = client.post("/api/ratings/toggle/5", headers=user_headers)
        like = client.post("/api/ratings", json={"content_id": 5}, headers=user_headers)
        status = client.get("/api/contents/5/ratings/user-status", headers=user_headers)

        assert (toggle.status_code, like.status_code, status.status_code) == (404, 404, 404)
        ratings.repo.create.assert_not_awaited()

    def test_admin_can_like(self, client, ratings, admin_headers):
        response = client.post("/api/ratings/toggle/5", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"content_id": 5, "liked": True, "like_count": 1}

    def test_stranger_cannot_bookmark(self, client, bookmarks, user_headers):
        create = client.post("/api/bookmarks", json={"content_id": 5}, headers=user_headers)
        toggle = client.post("/api/bookmarks/toggle/5", headers=user_headers)

        assert (create.status_code, toggle.status_code) == (404, 404)
        bookmarks.repo.create.assert_not_awaited()

    def test_author_can_bookmark(self, client, bookmarks, other_user_headers):
        response = client.post("/api/bookmarks/toggle/5", headers=other_user_headers)

        assert response.status_code == 200
        assert response.json() == {"content_id": 5, "bookmarked": True}
