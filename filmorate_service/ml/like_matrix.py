"""Sparse user x film like matrix for neighbor-based recommendations."""
import logging
from typing import Dict, List, Set, Tuple

import numpy as np
from scipy.sparse import csr_matrix

logger = logging.getLogger(__name__)


class LikeMatrix:
    """
    Binary user x film matrix built from the like edge set.

    Rows are users in ascending ID order, columns are films in ascending ID
    order. Similarity between two users is the raw number of films both
    like (no normalization).
    """

    def __init__(self, user_likes: Dict[int, Set[int]]):
        """
        Build the matrix.

        Args:
            user_likes: Dict mapping user_id to the set of liked film IDs
        """
        user_ids = sorted(user_likes)
        film_ids = sorted({film_id for films in user_likes.values() for film_id in films})

        self.user_ids = np.array(user_ids, dtype=np.int64)
        self.film_ids = np.array(film_ids, dtype=np.int64)
        self._user_index = {user_id: idx for idx, user_id in enumerate(user_ids)}
        self._film_index = {film_id: idx for idx, film_id in enumerate(film_ids)}

        rows = []
        cols = []
        for user_id, films in user_likes.items():
            for film_id in films:
                rows.append(self._user_index[user_id])
                cols.append(self._film_index[film_id])

        self.matrix = csr_matrix(
            (np.ones(len(rows), dtype=np.int32), (rows, cols)),
            shape=(len(user_ids), len(film_ids)),
        )

        logger.debug(f"Built like matrix: {self.matrix.shape}, {self.matrix.nnz} likes")

    @property
    def shape(self) -> Tuple[int, int]:
        return self.matrix.shape

    def __contains__(self, user_id: int) -> bool:
        return user_id in self._user_index

    def likes_of(self, user_id: int) -> Set[int]:
        """Get the film IDs a user likes (empty for unknown users)."""
        if user_id not in self._user_index:
            return set()
        row = self.matrix[self._user_index[user_id]]
        return {int(film_id) for film_id in self.film_ids[row.indices]}

    def overlaps(self, user_id: int) -> np.ndarray:
        """
        Count films each user shares with ``user_id``.

        Returns:
            Array aligned with ``user_ids``; the entry for ``user_id`` itself
            is its own like count
        """
        row = self.matrix[self._user_index[user_id]]
        return np.asarray((self.matrix @ row.T).toarray()).ravel()

    def nearest_neighbors(self, user_id: int, limit: int = 10) -> List[Tuple[int, int]]:
        """
        Select the users sharing the most likes with ``user_id``.

        Only users with a positive overlap qualify. Ties on overlap are broken
        by user ID ascending.

        Args:
            user_id: Target user
            limit: Maximum number of neighbors

        Returns:
            List of (neighbor_id, overlap) sorted by overlap descending
        """
        if user_id not in self._user_index or limit <= 0:
            return []

        overlaps = self.overlaps(user_id)
        overlaps[self._user_index[user_id]] = 0

        candidates = np.flatnonzero(overlaps > 0)
        if candidates.size == 0:
            return []

        # lexsort: last key is primary
        order = np.lexsort((self.user_ids[candidates], -overlaps[candidates]))
        chosen = candidates[order][:limit]

        return [(int(self.user_ids[idx]), int(overlaps[idx])) for idx in chosen]

    def candidate_films(self, user_id: int, neighbor_ids: List[int]) -> List[int]:
        """
        Films liked by any neighbor but not by ``user_id``.

        Films are ranked by how many neighbors like them (descending), then
        by film ID ascending.

        Args:
            user_id: Target user
            neighbor_ids: Users whose likes are pooled

        Returns:
            Ranked film IDs
        """
        rows = [self._user_index[n] for n in neighbor_ids if n in self._user_index]
        if not rows:
            return []

        support = np.asarray(self.matrix[rows].sum(axis=0)).ravel()
        if user_id in self._user_index:
            support[self.matrix[self._user_index[user_id]].indices] = 0

        candidates = np.flatnonzero(support > 0)
        order = np.lexsort((self.film_ids[candidates], -support[candidates]))

        return [int(film_id) for film_id in self.film_ids[candidates[order]]]
