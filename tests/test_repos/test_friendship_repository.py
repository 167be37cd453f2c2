"""Unit tests for filmorate_service.repos.friendship_repository."""
import pytest

from filmorate_service.models import Friendship, FriendshipStatus
from filmorate_service.repos import FriendshipRepository


@pytest.fixture
def friendship_repository(test_db_session):
    return FriendshipRepository(test_db_session)


class TestAddFriend:
    """Tests for add_friend method."""

    def test_add_friend_creates_pending_edge(self, friendship_repository, test_db_session, sample_users):
        """Test that a new edge is PENDING."""
        # Arrange
        alice, bob, _ = sample_users

        # Act
        edge = friendship_repository.add_friend(alice.id, bob.id)

        # Assert
        assert edge.status == FriendshipStatus.PENDING
        assert test_db_session.query(Friendship).count() == 1

    def test_add_friend_is_directed(self, friendship_repository, sample_users):
        """Test that an edge does not imply the reverse edge."""
        # Arrange
        alice, bob, _ = sample_users

        # Act
        friendship_repository.add_friend(alice.id, bob.id)

        # Assert
        assert friendship_repository.get_edge(alice.id, bob.id) is not None
        assert friendship_repository.get_edge(bob.id, alice.id) is None

    def test_add_friend_resets_confirmed_edge(self, friendship_repository, test_db_session, sample_users):
        """Test that re-adding a confirmed edge resets it to PENDING."""
        # Arrange
        alice, bob, _ = sample_users
        friendship_repository.add_friend(alice.id, bob.id)
        friendship_repository.confirm_friend(alice.id, bob.id)

        # Act
        edge = friendship_repository.add_friend(alice.id, bob.id)

        # Assert
        assert edge.status == FriendshipStatus.PENDING
        assert test_db_session.query(Friendship).filter_by(user_id=alice.id).count() == 1


class TestConfirmAndRemove:
    """Tests for confirm_friend and remove_friend methods."""

    def test_confirm_friend(self, friendship_repository, test_db_session, sample_users):
        """Test confirming an existing edge."""
        # Arrange
        alice, bob, _ = sample_users
        friendship_repository.add_friend(alice.id, bob.id)

        # Act
        updated = friendship_repository.confirm_friend(alice.id, bob.id)

        # Assert
        assert updated is True
        test_db_session.expire_all()
        assert friendship_repository.get_edge(alice.id, bob.id).status == FriendshipStatus.CONFIRMED

    def test_confirm_missing_edge(self, friendship_repository, sample_users):
        """Test confirming an edge that does not exist."""
        # Arrange
        alice, bob, _ = sample_users

        # Act & Assert
        assert friendship_repository.confirm_friend(alice.id, bob.id) is False

    def test_remove_friend(self, friendship_repository, test_db_session, sample_users):
        """Test deleting an edge, then deleting it again."""
        # Arrange
        alice, bob, _ = sample_users
        friendship_repository.add_friend(alice.id, bob.id)

        # Act & Assert
        assert friendship_repository.remove_friend(alice.id, bob.id) is True
        assert friendship_repository.remove_friend(alice.id, bob.id) is False
        assert test_db_session.query(Friendship).count() == 0


class TestGetFriends:
    """Tests for get_friends method."""

    def test_get_friends_ordered_by_id(self, friendship_repository, sample_users):
        """Test that friends come back ordered by user ID."""
        # Arrange
        alice, bob, carol = sample_users
        friendship_repository.add_friend(alice.id, carol.id)
        friendship_repository.add_friend(alice.id, bob.id)

        # Act
        friends = friendship_repository.get_friends(alice.id)

        # Assert
        assert [f.login for f in friends] == ['bob', 'carol']

    def test_get_friends_filtered_by_status(self, friendship_repository, sample_users):
        """Test the status filter."""
        # Arrange
        alice, bob, carol = sample_users
        friendship_repository.add_friend(alice.id, bob.id)
        friendship_repository.add_friend(alice.id, carol.id)
        friendship_repository.confirm_friend(alice.id, carol.id)

        # Act
        confirmed = friendship_repository.get_friends(alice.id, FriendshipStatus.CONFIRMED)
        pending = friendship_repository.get_friends(alice.id, FriendshipStatus.PENDING)

        # Assert
        assert [f.login for f in confirmed] == ['carol']
        assert [f.login for f in pending] == ['bob']

    def test_get_friends_of_user_without_edges(self, friendship_repository, sample_users):
        """Test that a user with no edges has no friends."""
        assert friendship_repository.get_friends(sample_users[2].id) == []
