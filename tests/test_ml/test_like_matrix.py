"""Unit tests for filmorate_service.ml.like_matrix."""
import numpy as np
import pytest

from filmorate_service.ml import LikeMatrix


@pytest.fixture
def sample_likes():
    """Users 1-4 with overlapping likes."""
    return {
        1: {10, 20},
        2: {20, 30},
        3: {40},
        4: {10, 20, 50},
    }


class TestLikeMatrixInit:
    """Tests for LikeMatrix construction."""

    def test_shape_and_axes(self, sample_likes):
        """Test that rows and columns are sorted IDs."""
        # Act
        matrix = LikeMatrix(sample_likes)

        # Assert
        assert matrix.shape == (4, 5)
        assert matrix.user_ids.tolist() == [1, 2, 3, 4]
        assert matrix.film_ids.tolist() == [10, 20, 30, 40, 50]
        assert matrix.matrix.nnz == 8

    def test_empty_matrix(self):
        """Test building from no likes."""
        # Act
        matrix = LikeMatrix({})

        # Assert
        assert matrix.shape == (0, 0)
        assert 1 not in matrix
        assert matrix.nearest_neighbors(1) == []

    def test_likes_of(self, sample_likes):
        """Test reading a user's row back."""
        # Act
        matrix = LikeMatrix(sample_likes)

        # Assert
        assert matrix.likes_of(4) == {10, 20, 50}
        assert matrix.likes_of(99) == set()


class TestOverlaps:
    """Tests for overlaps method."""

    def test_overlap_counts(self, sample_likes):
        """Test raw shared-like counts."""
        # Act
        overlaps = LikeMatrix(sample_likes).overlaps(1)

        # Assert
        np.testing.assert_array_equal(overlaps, [2, 1, 0, 2])


class TestNearestNeighbors:
    """Tests for nearest_neighbors method."""

    def test_neighbors_sorted_by_overlap(self, sample_likes):
        """Test that neighbors are ranked by overlap and exclude the user."""
        # Act
        neighbors = LikeMatrix(sample_likes).nearest_neighbors(1)

        # Assert
        assert neighbors == [(4, 2), (2, 1)]

    def test_zero_overlap_excluded(self, sample_likes):
        """Test that users sharing nothing are not neighbors."""
        assert LikeMatrix(sample_likes).nearest_neighbors(3) == []

    def test_ties_broken_by_user_id(self):
        """Test that equal overlaps are ordered by user ID."""
        # Arrange
        likes = {5: {1}, 3: {1}, 1: {1}, 4: {1}}

        # Act
        neighbors = LikeMatrix(likes).nearest_neighbors(5, limit=2)

        # Assert
        assert neighbors == [(1, 1), (3, 1)]

    def test_limit(self, sample_likes):
        """Test the neighbor limit, including a non-positive one."""
        # Arrange
        matrix = LikeMatrix(sample_likes)

        # Assert
        assert matrix.nearest_neighbors(1, limit=1) == [(4, 2)]
        assert matrix.nearest_neighbors(1, limit=0) == []


class TestCandidateFilms:
    """Tests for candidate_films method."""

    def test_excludes_own_likes(self, sample_likes):
        """Test that films the user already likes are not candidates."""
        # Act
        films = LikeMatrix(sample_likes).candidate_films(1, [4, 2])

        # Assert
        assert films == [30, 50]

    def test_ranked_by_support(self):
        """Test that films liked by more neighbors rank first."""
        # Arrange
        likes = {1: {1}, 2: {1, 9, 7}, 3: {1, 7}}

        # Act
        films = LikeMatrix(likes).candidate_films(1, [2, 3])

        # Assert
        assert films == [7, 9]

    def test_no_neighbors(self, sample_likes):
        """Test that no neighbors yields no candidates."""
        assert LikeMatrix(sample_likes).candidate_films(1, []) == []
