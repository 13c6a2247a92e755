# =============================================================================
# tests/test_models.py - ORM model and constraint tests
# =============================================================================

from datetime import timedelta
from types import SimpleNamespace

import pytest
from sqlalchemy.exc import IntegrityError

from media_platform.core.exceptions import ConflictError, DuplicateResourceError, ValidationError
from media_platform.models import Base, Content
from media_platform.repositories.base import translate_integrity_error
from tests.conftest import NOW


def _constraint_names(table_name):
    table = Base.metadata.tables[table_name]
    return {constraint.name for constraint in table.constraints}


# =============================================================================
# Content lifecycle
# =============================================================================

class TestContentLifecycle:

    def _draft(self):
        return Content(title="Draft", body="Body", author_id=1, category_id=1, status="draft")

    def test_first_publish_stamps_published_at(self):
        content = self._draft()
        content.set_status("published", now=NOW)

        assert content.is_published
        assert content.published_at == NOW

    def test_republish_keeps_original_timestamp(self):
        """archived → published must not move published_at."""
        content = self._draft()
        content.set_status("published", now=NOW)
        content.set_status("archived", now=NOW + timedelta(days=1))
        content.set_status("published", now=NOW + timedelta(days=2))

        assert content.status == "published"
        assert content.published_at == NOW

    def test_non_published_status_leaves_timestamp_empty(self):
        content = self._draft()
        content.set_status("pending", now=NOW)

        assert not content.is_published
        assert content.published_at is None

    def test_author_and_admin_can_edit(self):
        content = self._draft()

        assert content.can_edit(1, "user")
        assert content.can_edit(42, "admin")
        assert not content.can_edit(42, "user")

    def test_unpublished_visible_only_to_author_and_admin(self):
        content = self._draft()

        assert content.is_visible_to(1, "user")
        assert content.is_visible_to(42, "admin")
        assert not content.is_visible_to(42, "user")
        assert not content.is_visible_to(None, None)

    def test_published_visible_to_everyone(self):
        content = self._draft()
        content.set_status("published", now=NOW)

        assert content.is_visible_to(None, None)
        assert content.is_visible_to(42, "user")

    def test_genre_column(self):
        column = Base.metadata.tables["contents"].c.genre

        assert column.nullable
        assert column.type.length == 100


# =============================================================================
# Schema constraints
# =============================================================================

class TestConstraintNames:

    def test_follow_constraints(self):
        names = _constraint_names("follows")
        assert "uq_follows_pair" in names
        assert "ck_follows_no_self_follow" in names

    def test_rating_constraints(self):
        names = _constraint_names("ratings")
        assert "uq_ratings_user_content" in names
        assert "ck_ratings_like_only" in names

    def test_content_checks(self):
        names = _constraint_names("contents")
        assert "ck_contents_type" in names
        assert "ck_contents_status" in names

    def test_search_vector_gin_index(self):
        indexes = {index.name: index for index in Base.metadata.tables["contents"].indexes}
        assert "ix_contents_search_vector" in indexes
        assert indexes["ix_contents_search_vector"].dialect_options["postgresql"]["using"] == "gin"

    def test_every_table_registered(self):
        assert {
            "users",
            "categories",
            "contents",
            "comments",
            "ratings",
            "follows",
            "bookmarks",
            "follow_notification_settings",
        } <= set(Base.metadata.tables)


# =============================================================================
# IntegrityError translation
# =============================================================================

def _integrity_error(sqlstate):
    return IntegrityError("INSERT ...", {}, SimpleNamespace(sqlstate=sqlstate))


class TestTranslateIntegrityError:

    def test_unique_violation_is_conflict(self):
        error = translate_integrity_error(_integrity_error("23505"), "Follow")
        assert isinstance(error, DuplicateResourceError)
        assert isinstance(error, ConflictError)
        assert error.status_code == 409
        assert error.message == "Follow already exists"

    @pytest.mark.parametrize("sqlstate", ["23514", "23503"])
    def test_check_and_foreign_key_violations_are_validation_errors(self, sqlstate):
        error = translate_integrity_error(_integrity_error(sqlstate), "Rating")
        assert isinstance(error, ValidationError)
        assert error.status_code == 400

    def test_unknown_state(self):
        error = translate_integrity_error(_integrity_error(None), "Bookmark")
        assert isinstance(error, ValidationError)
        assert error.message == "Could not save bookmark"
