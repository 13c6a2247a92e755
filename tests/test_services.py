# =============================================================================
# tests/test_services.py - Service layer tests
# =============================================================================
# Services are built on a MagicMock session and their repositories are
# swapped for AsyncMocks, so these run without PostgreSQL.
# =============================================================================

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import inspect
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import DBAPIError

from media_platform.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ContentNotFoundError,
    DuplicateResourceError,
    FollowNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from media_platform.models import Content
from media_platform.repositories.content_repository import ContentRepository, escape_like
from media_platform.services import (
    AuthService,
    BookmarkService,
    CategoryService,
    CommentService,
    ContentService,
    FollowService,
    RatingService,
    UserService,
)
from tests.conftest import NOW, make_comment, make_content, make_orm_content, make_user, mock_repo


def run(coro):
    return asyncio.run(coro)


# =============================================================================
# Auth
# =============================================================================

class TestAuthService:

    def test_register_duplicate_email(self):
        service = AuthService(MagicMock())
        service.repo = mock_repo(email_exists=True, username_exists=False)

        with pytest.raises(DuplicateResourceError) as exc_info:
            run(service.register_user("jane_doe", "jane@example.com", "s3cret"))

        assert exc_info.value.details == {"field": "email"}
        service.repo.create.assert_not_awaited()

    def test_register_duplicate_username(self):
        service = AuthService(MagicMock())
        service.repo = mock_repo(email_exists=False, username_exists=True)

        with pytest.raises(DuplicateResourceError, match="Username already taken"):
            run(service.register_user("jane_doe", "jane@example.com", "s3cret"))

    def test_register_hashes_password_and_issues_token(self):
        service = AuthService(MagicMock())
        service.repo = mock_repo(email_exists=False, username_exists=False, create=make_user(7, "jane_doe"))

        user, token, expires_in = run(service.register_user("jane_doe", "jane@example.com", "s3cret"))

        kwargs = service.repo.create.await_args.kwargs
        assert kwargs["password_hash"] != "s3cret"
        assert kwargs["role"] == "user"
        assert user.id == 7
        assert token
        assert expires_in > 0

    def test_register_stores_lowercased_email(self):
        service = AuthService(MagicMock())
        service.repo = mock_repo(email_exists=False, username_exists=False, create=make_user(7, "jane_doe"))

        run(service.register_user("jane_doe", "Jane@Example.COM", "s3cret"))

        service.repo.email_exists.assert_awaited_once_with("jane@example.com")
        assert service.repo.create.await_args.kwargs["email"] == "jane@example.com"

    def test_login_wrong_password(self):
        service = AuthService(MagicMock())
        service.repo = mock_repo(get_by_email=make_user())

        with pytest.raises(AuthenticationError, match="Invalid email or password"):
            run(service.login_user("alice@example.com", "wrong"))

    def test_login_unknown_email(self):
        service = AuthService(MagicMock())
        service.repo = mock_repo(get_by_email=None)

        with pytest.raises(AuthenticationError, match="Invalid email or password"):
            run(service.login_user("nobody@example.com", "secret123"))

    def test_login_success(self):
        service = AuthService(MagicMock())
        service.repo = mock_repo(get_by_email=make_user())

        user, token, _ = run(service.login_user("alice@example.com", "secret123"))

        assert user.username == "alice"
        assert token.count(".") == 2


# =============================================================================
# Users
# =============================================================================

class TestUserService:

    def test_admin_cannot_delete_self(self):
        service = UserService(MagicMock())
        service.repo = mock_repo()

        with pytest.raises(ValidationError):
            run(service.delete_user(99, acting_user_id=99))
        service.repo.delete_instance.assert_not_awaited()

    def test_delete_missing_user(self):
        service = UserService(MagicMock())
        service.repo = mock_repo(get=None)

        with pytest.raises(UserNotFoundError):
            run(service.delete_user(5, acting_user_id=99))

    def test_profile_update_hashes_new_password(self):
        user = make_user()
        service = UserService(MagicMock())
        service.repo = mock_repo(get=user, apply=user)

        run(service.update_profile(1, {"password": "n3wpass", "bio": "Hi"}))

        kwargs = service.repo.apply.await_args.kwargs
        assert "password" not in kwargs
        assert kwargs["password_hash"].startswith("$2")
        assert kwargs["bio"] == "Hi"

    def test_profile_update_email_taken(self):
        service = UserService(MagicMock())
        service.repo = mock_repo(get=make_user(), email_exists=True)

        with pytest.raises(DuplicateResourceError):
            run(service.update_profile(1, {"email": "bob@example.com"}))

    def test_profile_update_lowercases_email(self):
        user = make_user()
        service = UserService(MagicMock())
        service.repo = mock_repo(get=user, email_exists=False, apply=user)

        run(service.update_profile(1, {"email": "Alice.New@Example.com"}))

        service.repo.email_exists.assert_awaited_once_with("alice.new@example.com", exclude_id=1)
        assert service.repo.apply.await_args.kwargs["email"] == "alice.new@example.com"


# =============================================================================
# Categories
# =============================================================================

class TestCategoryService:

    def test_duplicate_name(self):
        service = CategoryService(MagicMock())
        service.repo = mock_repo(get_by_name=SimpleNamespace(id=1, name="News"))

        with pytest.raises(DuplicateResourceError):
            run(service.create_category("news"))

    def test_missing_parent(self):
        service = CategoryService(MagicMock())
        service.repo = mock_repo(get_by_name=None, exists=False)

        with pytest.raises(ValidationError, match="Parent category does not exist"):
            run(service.create_category("Gadgets", parent_id=404))

    def test_cannot_be_own_parent(self):
        service = CategoryService(MagicMock())
        service.repo = mock_repo(get=SimpleNamespace(id=3, name="Tech"))

        with pytest.raises(ValidationError, match="own parent"):
            run(service.update_category(3, {"parent_id": 3}))

    def test_cannot_move_under_descendant(self):
        """3 → 5 → 8; moving 3 under 8 would create a cycle."""
        service = CategoryService(MagicMock())
        service.repo = mock_repo(get=SimpleNamespace(id=3, name="Tech"), exists=True, get_ancestor_ids={5, 3})

        with pytest.raises(ValidationError, match="descendants"):
            run(service.update_category(3, {"parent_id": 8}))

    def test_detach_to_top_level(self):
        category = SimpleNamespace(id=3, name="Tech")
        service = CategoryService(MagicMock())
        service.repo = mock_repo(get=category, apply=category)

        run(service.update_category(3, {"parent_id": None}))

        service.repo.apply.assert_awaited_once_with(category, parent_id=None)


# =============================================================================
# Content
# =============================================================================

def _content_service(**repo_methods):
    service = ContentService(MagicMock())
    service.repo = mock_repo(**repo_methods)
    service.category_repo = mock_repo(exists=True)
    service.user_repo = mock_repo(exists=True)
    return service


def _orm_content(status="draft", author_id=1):
    return Content(id=10, title="T", body="B", author_id=author_id, category_id=1, status=status, view_count=0)


class TestContentService:

    def test_create_defaults_to_draft(self):
        service = _content_service()
        service.repo.add.side_effect = lambda content: content

        content = run(service.create_content(1, {"title": "T", "body": "B", "type": "article", "category_id": 1}))

        assert content.status == "draft"
        assert content.published_at is None
        assert content.author_id == 1

    def test_create_published_stamps_timestamp(self):
        service = _content_service()
        service.repo.add.side_effect = lambda content: content

        content = run(
            service.create_content(
                1, {"title": "T", "body": "B", "type": "video", "category_id": 1, "status": "published"}
            )
        )

        assert content.published_at is not None

    def test_create_with_missing_category(self):
        service = _content_service()
        service.category_repo = mock_repo(exists=False)

        with pytest.raises(ValidationError, match="Category does not exist"):
            run(service.create_content(1, {"title": "T", "body": "B", "category_id": 404}))

    def test_draft_hidden_from_other_users(self):
        service = _content_service(get=_orm_content("draft", author_id=1))

        with pytest.raises(ContentNotFoundError):
            run(service.get_content(10, viewer_id=2, viewer_role="user"))
        with pytest.raises(ContentNotFoundError):
            run(service.get_content(10))
        service.repo.increment_view_count.assert_not_awaited()

    def test_draft_visible_to_author_and_admin(self):
        service = _content_service(get=_orm_content("draft", author_id=1))

        assert run(service.get_content(10, viewer_id=1, viewer_role="user")).id == 10
        assert run(service.get_content(10, viewer_id=99, viewer_role="admin")).id == 10

    def test_read_counts_view(self):
        content = _orm_content("published")
        service = _content_service(get=content)

        run(service.get_content(10))

        service.repo.increment_view_count.assert_awaited_once_with(content)

    def test_only_author_or_admin_may_edit(self):
        service = _content_service(get=_orm_content("draft", author_id=1))

        with pytest.raises(AuthorizationError):
            run(service.update_content(10, 2, "user", {"title": "Hijacked"}))
        with pytest.raises(AuthorizationError):
            run(service.delete_content(10, 2, "user"))

    def test_status_change_publishes_once(self):
        content = _orm_content("draft")
        service = _content_service(get=content, apply=content)

        run(service.change_status(10, 1, "user", "published"))
        first = content.published_at
        run(service.change_status(10, 1, "user", "archived"))
        run(service.change_status(10, 1, "user", "published"))

        assert first is not None
        assert content.published_at == first

    def test_listing_forces_published_for_strangers(self):
        service = _content_service(list_filtered=([], 0))

        run(service.list_contents(offset=0, limit=20, viewer_id=2, viewer_role="user", author_id=1))

        assert service.repo.list_filtered.await_args.kwargs["status"] == "published"

    def test_listing_draft_filter_for_strangers_is_empty(self):
        service = _content_service(list_filtered=([make_content()], 1))

        items, total = run(service.list_contents(offset=0, limit=20, status="draft"))

        assert (items, total) == ([], 0)
        service.repo.list_filtered.assert_not_awaited()

    def test_listing_own_drafts(self):
        service = _content_service(list_filtered=([], 0))

        run(service.list_contents(offset=0, limit=20, viewer_id=1, viewer_role="user", author_id=1, status="draft"))

        assert service.repo.list_filtered.await_args.kwargs["status"] == "draft"

    def test_listing_passes_genre_filter(self):
        service = _content_service(list_filtered=([], 0))

        run(service.list_contents(offset=0, limit=20, genre="jazz"))

        kwargs = service.repo.list_filtered.await_args.kwargs
        assert (kwargs["genre"], kwargs["status"]) == ("jazz", "published")

    def test_admin_sees_every_status(self):
        service = _content_service(list_filtered=([], 0))

        run(service.list_contents(offset=0, limit=20, viewer_id=99, viewer_role="admin"))

        assert service.repo.list_filtered.await_args.kwargs.get("status") is None

    def test_blank_search_returns_published_listing(self):
        items = [make_content(1), make_content(2)]
        service = _content_service(list_published=(items, 2))

        results = run(service.search("   ", offset=0, limit=20))

        assert results == [(items[0], 0.0), (items[1], 0.0)]
        service.repo.search.assert_not_awaited()

    def test_trending_ranks_candidates(self):
        quiet = make_content(1, view_count=0, published_at=NOW)
        busy = make_content(2, view_count=5000, published_at=NOW)
        service = _content_service(trending_candidates=[quiet, busy])

        ranked = run(service.trending(1))

        assert [item.id for item, _ in ranked] == [2]


class TestContentSearchFallback:

    def _repo(self):
        repo = ContentRepository(MagicMock())
        repo._search_fallback = AsyncMock(return_value=[("fallback", 1.0)])
        return repo

    def test_fulltext_hits_are_returned(self):
        repo = self._repo()
        repo._search_fulltext = AsyncMock(return_value=[("fulltext", 12.5)])

        assert run(repo.search("postgres", offset=0, limit=10)) == [("fulltext", 12.5)]
        repo._search_fallback.assert_not_awaited()

    def test_no_fulltext_hits_falls_back(self):
        repo = self._repo()
        repo._search_fulltext = AsyncMock(return_value=[])

        assert run(repo.search("postgres", offset=0, limit=10)) == [("fallback", 1.0)]

    def test_function_error_falls_back(self):
        repo = self._repo()
        repo._search_fulltext = AsyncMock(
            side_effect=DBAPIError("SELECT search_contents(...)", {}, Exception("function does not exist"))
        )

        assert run(repo.search("postgres", offset=0, limit=10)) == [("fallback", 1.0)]

    def test_like_wildcards_are_escaped(self):
        assert escape_like("50%_off\\") == "50\\%\\_off\\\\"


class TestContentRepositoryQueries:

    def test_genre_filter_clause(self):
        clauses = ContentRepository._filter_clauses(genre="jazz", status="published")

        compiled = [str(clause.compile(dialect=postgresql.dialect())) for clause in clauses]
        assert "contents.genre = %(genre_1)s" in compiled

    def test_view_count_bump_leaves_instance_clean(self):
        session = MagicMock()
        session.execute = AsyncMock(return_value=MagicMock(scalar_one=MagicMock(return_value=8)))
        repo = ContentRepository(session)
        content = _orm_content("published")
        content.view_count = 7

        run(repo.increment_view_count(content))

        assert content.view_count == 8
        assert not inspect(content).attrs.view_count.history.has_changes()

    def test_view_count_bump_keeps_updated_at(self):
        session = MagicMock()
        session.execute = AsyncMock(return_value=MagicMock(scalar_one=MagicMock(return_value=1)))
        repo = ContentRepository(session)

        run(repo.increment_view_count(_orm_content("published")))

        statement = session.execute.await_args.args[0]
        sql = str(statement.compile(dialect=postgresql.dialect()))
        assert "updated_at=contents.updated_at" in sql


# =============================================================================
# Comments
# =============================================================================

class TestCommentService:

    def _service(self, parent=None):
        service = CommentService(MagicMock())
        service.repo = mock_repo(get=parent, create=SimpleNamespace(id=3))
        service.content_repo = mock_repo(get=make_orm_content(1))
        return service

    def test_reply_to_comment_on_other_content(self):
        service = self._service(parent=SimpleNamespace(id=1, content_id=2))

        with pytest.raises(ValidationError, match="different content"):
            run(service.create_comment(1, content_id=1, body="Reply", parent_id=1))

    def test_reply_to_missing_parent(self):
        service = self._service(parent=None)

        with pytest.raises(ValidationError, match="does not exist"):
            run(service.create_comment(1, content_id=1, body="Reply", parent_id=9))

    def test_reply_on_same_content(self):
        service = self._service(parent=SimpleNamespace(id=1, content_id=1))

        run(service.create_comment(1, content_id=1, body="Reply", parent_id=1))

        service.repo.create.assert_awaited_once_with(user_id=1, content_id=1, body="Reply", parent_id=1)

    def test_comment_on_missing_content(self):
        service = self._service()
        service.content_repo = mock_repo(get=None)

        with pytest.raises(ContentNotFoundError):
            run(service.create_comment(1, content_id=404, body="Hi"))

    def test_comment_on_draft_of_another_user(self):
        service = self._service()
        service.content_repo = mock_repo(get=make_orm_content(5, author_id=2, status="draft"))

        with pytest.raises(ContentNotFoundError):
            run(service.create_comment(1, content_id=5, body="Hi"))
        service.repo.create.assert_not_awaited()

    def test_author_comments_on_own_draft(self):
        service = self._service()
        service.content_repo = mock_repo(get=make_orm_content(5, author_id=2, status="draft"))

        run(service.create_comment(2, content_id=5, body="Note to self"))

        service.repo.create.assert_awaited_once()

    def test_thread_of_draft_hidden_from_anonymous(self):
        service = self._service()
        service.repo = mock_repo(list_roots=([], 0), list_replies_for={})
        service.content_repo = mock_repo(get=make_orm_content(5, author_id=2, status="draft"))

        with pytest.raises(ContentNotFoundError):
            run(service.list_thread(5, offset=0, limit=20))
        service.repo.list_roots.assert_not_awaited()

        assert run(service.list_thread(5, offset=0, limit=20, viewer_id=99, viewer_role="admin")) == ([], 0)

    def test_comment_on_draft_hidden_with_its_replies(self):
        service = self._service()
        service.repo = mock_repo(get=make_comment(7, user_id=1, content_id=5), list_replies=([], 0))
        service.content_repo = mock_repo(get=make_orm_content(5, author_id=2, status="draft"))

        with pytest.raises(ContentNotFoundError):
            run(service.get_comment(7))
        with pytest.raises(ContentNotFoundError):
            run(service.list_replies(7, offset=0, limit=20, viewer_id=1, viewer_role="user"))
        assert run(service.get_comment(7, viewer_id=2, viewer_role="user")).id == 7


# =============================================================================
# Likes
# =============================================================================

class TestRatingService:

    def _service(self, **repo_methods):
        service = RatingService(MagicMock())
        service.repo = mock_repo(**repo_methods)
        service.content_repo = mock_repo(get=make_orm_content(42))
        service.user_repo = mock_repo(exists=True)
        return service

    def test_like_twice_is_conflict(self):
        service = self._service(get_user_rating=SimpleNamespace(id=5))

        with pytest.raises(DuplicateResourceError, match="already liked"):
            run(service.like(1, 42))

    def test_like_missing_content(self):
        service = self._service()
        service.content_repo = mock_repo(get=None)

        with pytest.raises(ContentNotFoundError):
            run(service.like(1, 42))

    def test_draft_of_another_user_cannot_be_liked(self):
        service = self._service(get_user_rating=None, count_for_content=1)
        service.content_repo = mock_repo(get=make_orm_content(5, author_id=2, status="draft"))

        with pytest.raises(ContentNotFoundError):
            run(service.toggle(1, 5))
        with pytest.raises(ContentNotFoundError):
            run(service.like(1, 5))
        service.repo.create.assert_not_awaited()

    def test_author_and_admin_can_like_draft(self):
        service = self._service(get_user_rating=None, count_for_content=1)
        service.content_repo = mock_repo(get=make_orm_content(5, author_id=2, status="draft"))

        assert run(service.toggle(2, 5)) == (True, 1)
        assert run(service.toggle(99, 5, "admin")) == (True, 1)

    def test_draft_stats_hidden_from_anonymous(self):
        service = self._service(count_for_content=3, list_by_content=([], 0))
        service.content_repo = mock_repo(get=make_orm_content(5, author_id=2, status="pending"))

        with pytest.raises(ContentNotFoundError):
            run(service.content_stats(5))
        with pytest.raises(ContentNotFoundError):
            run(service.list_for_content(5, offset=0, limit=20))
        with pytest.raises(ContentNotFoundError):
            run(service.user_status(1, 5))
        assert run(service.content_stats(5, viewer_id=2, viewer_role="user"))["like_count"] == 3

    def test_toggle_unlikes_existing(self):
        existing = SimpleNamespace(id=5)
        service = self._service(get_user_rating=existing, count_for_content=3)

        liked, count = run(service.toggle(1, 42))

        assert (liked, count) == (False, 3)
        service.repo.delete_instance.assert_awaited_once_with(existing)

    def test_toggle_likes_when_absent(self):
        service = self._service(get_user_rating=None, count_for_content=4)

        liked, count = run(service.toggle(1, 42))

        assert (liked, count) == (True, 4)
        service.repo.create.assert_awaited_once_with(user_id=1, content_id=42, value=1)

    def test_bulk_stats_fills_missing_with_zero(self):
        service = self._service(counts_for_contents={42: 17})

        assert run(service.bulk_stats([42, 43, 42])) == {42: 17, 43: 0}
        service.repo.counts_for_contents.assert_awaited_once_with([42, 43])

    def test_only_owner_or_admin_can_delete(self):
        service = self._service(get=SimpleNamespace(id=5, user_id=1))

        with pytest.raises(AuthorizationError):
            run(service.delete_rating(5, 2, "user"))
        run(service.delete_rating(5, 99, "admin"))
        service.repo.delete_instance.assert_awaited_once()


# =============================================================================
# Follows
# =============================================================================

class TestFollowService:

    def _service(self, **repo_methods):
        service = FollowService(MagicMock())
        service.repo = mock_repo(**repo_methods)
        service.user_repo = mock_repo(exists=True)
        return service

    def test_cannot_follow_self(self):
        service = self._service()

        with pytest.raises(ValidationError, match="cannot follow yourself"):
            run(service.follow(1, 1))
        service.repo.create.assert_not_awaited()

    def test_follow_missing_user(self):
        service = self._service()
        service.user_repo = mock_repo(exists=False)

        with pytest.raises(UserNotFoundError):
            run(service.follow(1, 404))

    def test_follow_twice_is_conflict(self):
        service = self._service(is_following=True)

        with pytest.raises(DuplicateResourceError, match="already following"):
            run(service.follow(1, 2))

    def test_unfollow_without_edge(self):
        service = self._service(get_pair=None)

        with pytest.raises(FollowNotFoundError):
            run(service.unfollow(1, 2))

    def test_stats_mutual(self):
        service = self._service(is_following=True, count_followers=10, count_following=4)

        stats = run(service.stats(2, viewer_id=1))

        assert stats["followers_count"] == 10
        assert stats["following_count"] == 4
        assert stats["is_mutual_follow"] is True

    def test_stats_for_own_profile_has_no_relationship_flags(self):
        service = self._service(is_following=True, count_followers=0, count_following=0)

        stats = run(service.stats(1, viewer_id=1))

        assert stats["is_following"] is False
        service.repo.is_following.assert_not_awaited()


# =============================================================================
# Bookmarks
# =============================================================================

class TestBookmarkService:

    def _service(self, **repo_methods):
        service = BookmarkService(MagicMock())
        service.repo = mock_repo(**repo_methods)
        service.content_repo = mock_repo(get=make_orm_content(42))
        return service

    def test_bookmark_twice_is_conflict(self):
        service = self._service(get_user_bookmark=SimpleNamespace(id=1))

        with pytest.raises(DuplicateResourceError, match="already bookmarked"):
            run(service.create_bookmark(1, 42))

    def test_toggle_adds_then_reports_state(self):
        service = self._service(get_user_bookmark=None, create=SimpleNamespace(id=8))

        assert run(service.toggle(1, 42)) is True
        service.repo.create.assert_awaited_once_with(user_id=1, content_id=42)

    def test_toggle_removes_existing(self):
        existing = SimpleNamespace(id=8)
        service = self._service(get_user_bookmark=existing)

        assert run(service.toggle(1, 42)) is False
        service.repo.delete_instance.assert_awaited_once_with(existing)

    def test_draft_of_another_user_cannot_be_bookmarked(self):
        service = self._service(get_user_bookmark=None)
        service.content_repo = mock_repo(get=make_orm_content(5, author_id=2, status="archived"))

        with pytest.raises(ContentNotFoundError):
            run(service.create_bookmark(1, 5))
        with pytest.raises(ContentNotFoundError):
            run(service.toggle(1, 5))
        service.repo.create.assert_not_awaited()

    def test_admin_can_bookmark_draft(self):
        service = self._service(get_user_bookmark=None, create=SimpleNamespace(id=8))
        service.content_repo = mock_repo(get=make_orm_content(5, author_id=2, status="draft"))

        run(service.create_bookmark(99, 5, "admin"))

        service.repo.create.assert_awaited_once_with(user_id=99, content_id=5)
