"""Unit tests for filmorate_service.repos.like_repository."""
from unittest.mock import patch

import pytest
from sqlalchemy.exc import IntegrityError

from filmorate_service.models import Like
from filmorate_service.repos import LikeRepository


@pytest.fixture
def like_repository(test_db_session):
    return LikeRepository(test_db_session)


class TestAddLike:
    """Tests for add_like method."""

    def test_add_like_inserts_edge(self, like_repository, test_db_session, sample_users, sample_films):
        """Test adding a new like."""
        # Act
        created = like_repository.add_like(sample_films[0].id, sample_users[0].id)

        # Assert
        assert created is True
        like = test_db_session.query(Like).one()
        assert (like.film_id, like.user_id) == (sample_films[0].id, sample_users[0].id)

    def test_add_like_twice_keeps_one_edge(self, like_repository, test_db_session, sample_users, sample_films):
        """Test that a repeated like is a no-op."""
        # Arrange
        like_repository.add_like(sample_films[0].id, sample_users[0].id)

        # Act
        created = like_repository.add_like(sample_films[0].id, sample_users[0].id)

        # Assert
        assert created is False
        assert test_db_session.query(Like).filter_by(film_id=sample_films[0].id).count() == 1

    def test_add_like_integrity_error_is_no_op(
        self, like_repository, test_db_session, sample_users, sample_films
    ):
        """Test that losing an insert race rolls back and reports no change."""
        # Arrange
        with patch.object(test_db_session, 'commit', side_effect=IntegrityError('stmt', {}, Exception())):
            with patch.object(test_db_session, 'rollback') as mock_rollback:
                # Act
                created = like_repository.add_like(sample_films[0].id, sample_users[0].id)

        # Assert
        assert created is False
        mock_rollback.assert_called_once()


class TestRemoveLike:
    """Tests for remove_like method."""

    def test_remove_like_deletes_edge(self, like_repository, test_db_session, sample_users, sample_films):
        """Test removing an existing like."""
        # Arrange
        like_repository.add_like(sample_films[0].id, sample_users[0].id)

        # Act
        removed = like_repository.remove_like(sample_films[0].id, sample_users[0].id)

        # Assert
        assert removed is True
        assert test_db_session.query(Like).count() == 0

    def test_remove_absent_like(self, like_repository, sample_users, sample_films):
        """Test that removing a missing like reports False."""
        assert like_repository.remove_like(sample_films[0].id, sample_users[0].id) is False


class TestLikeQueries:
    """Tests for like projections."""

    def test_get_user_likes(self, like_repository, sample_users, sample_films):
        """Test projecting the like edge set per user."""
        # Arrange
        alice, bob, _ = sample_users
        like_repository.add_like(sample_films[0].id, alice.id)
        like_repository.add_like(sample_films[1].id, alice.id)
        like_repository.add_like(sample_films[1].id, bob.id)

        # Act
        result = like_repository.get_user_likes()

        # Assert
        assert result == {
            alice.id: {sample_films[0].id, sample_films[1].id},
            bob.id: {sample_films[1].id},
        }

    def test_get_user_likes_empty(self, like_repository):
        """Test the projection with no likes."""
        assert like_repository.get_user_likes() == {}


class TestDeferredCommit:
    """Tests for writes made with commit=False."""

    def test_add_like_without_commit_is_rolled_back(
        self, like_repository, test_db_session, sample_users, sample_films
    ):
        """Test that a flushed like disappears when the transaction is rolled back."""
        # Act
        created = like_repository.add_like(sample_films[0].id, sample_users[0].id, commit=False)
        visible_before_rollback = test_db_session.query(Like).count()
        test_db_session.rollback()

        # Assert
        assert created is True
        assert visible_before_rollback == 1
        assert test_db_session.query(Like).count() == 0

    def test_remove_like_without_commit_is_rolled_back(
        self, like_repository, test_db_session, sample_users, sample_films
    ):
        """Test that a deferred delete can be undone."""
        # Arrange
        like_repository.add_like(sample_films[0].id, sample_users[0].id)

        # Act
        removed = like_repository.remove_like(sample_films[0].id, sample_users[0].id, commit=False)
        test_db_session.rollback()

        # Assert
        assert removed is True
        assert test_db_session.query(Like).count() == 1
