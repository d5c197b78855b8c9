# content_recommender/application/similarity.py

from typing import Dict, List, Sequence

import numpy as np

from content_recommender.domain.errors import InvalidInputError
from content_recommender.domain.models import DocumentVector, SimilarDocument, SimilarityTable


class SimilarityEngine:
    """
    Pairwise cosine similarity over TF-IDF vectors.

    Vectors are laid out as rows of a dense matrix over a shared vocabulary
    and L2-normalized, so a single matrix product yields every cosine score.
    Only scores strictly above min_score produce entries, and every pair
    produces two mirrored entries carrying the same score.
    """

    def __init__(self, min_score: float = 0.0):
        self._min_score = min_score

    def within(self, vectors: Sequence[DocumentVector]) -> SimilarityTable:
        """All unordered pairs of one collection. Self-pairs are skipped."""
        table = _empty_table(vectors)
        ids = [vector.id for vector in vectors]

        vocabulary = _build_vocabulary(vectors)
        matrix = _normalized_matrix(vectors, vocabulary)
        scores = np.clip(matrix @ matrix.T, 0.0, 1.0)

        # Strict lower triangle: pair (i, j) with j < i, visited row by row.
        rows, cols = np.nonzero(np.tril(scores > self._min_score, k=-1))
        for i, j in zip(rows.tolist(), cols.tolist()):
            score = float(scores[i, j])
            table[ids[i]].append(SimilarDocument(id=ids[j], score=score))
            table[ids[j]].append(SimilarDocument(id=ids[i], score=score))

        return table

    def between(
        self,
        sources: Sequence[DocumentVector],
        targets: Sequence[DocumentVector],
    ) -> SimilarityTable:
        """Every (source, target) pair. Pairs inside one collection are skipped."""
        colliding = {vector.id for vector in sources} & {vector.id for vector in targets}
        if colliding:
            raise InvalidInputError(
                f"Source and target documents share ids: {sorted(colliding)[:5]}"
            )

        table = {**_empty_table(sources), **_empty_table(targets)}
        source_ids = [vector.id for vector in sources]
        target_ids = [vector.id for vector in targets]

        vocabulary = _build_vocabulary(sources, targets)
        source_matrix = _normalized_matrix(sources, vocabulary)
        target_matrix = _normalized_matrix(targets, vocabulary)
        scores = np.clip(source_matrix @ target_matrix.T, 0.0, 1.0)

        rows, cols = np.nonzero(scores > self._min_score)
        for i, j in zip(rows.tolist(), cols.tolist()):
            score = float(scores[i, j])
            table[source_ids[i]].append(SimilarDocument(id=target_ids[j], score=score))
            table[target_ids[j]].append(SimilarDocument(id=source_ids[i], score=score))

        return table


def rank_similarities(table: SimilarityTable, max_similar_documents: int) -> SimilarityTable:
    """
    Sort every list by descending score and cap its length.

    The sort is stable, so equal scores keep their insertion order, which is
    the engine's pair visiting order.
    """
    return {
        document_id: sorted(entries, key=lambda entry: entry.score, reverse=True)[
            :max_similar_documents
        ]
        for document_id, entries in table.items()
    }


# ─── Matrix Helpers ───────────────────────────────────────────────────────────

def _empty_table(vectors: Sequence[DocumentVector]) -> Dict[str, List[SimilarDocument]]:
    return {vector.id: [] for vector in vectors}


def _build_vocabulary(*collections: Sequence[DocumentVector]) -> Dict[str, int]:
    vocabulary: Dict[str, int] = {}
    for collection in collections:
        for vector in collection:
            for term in vector.vector:
                vocabulary.setdefault(term, len(vocabulary))
    return vocabulary


def _normalized_matrix(vectors: Sequence[DocumentVector], vocabulary: Dict[str, int]) -> np.ndarray:
    matrix = np.zeros((len(vectors), len(vocabulary)), dtype=np.float64)
    for row, vector in enumerate(vectors):
        for term, weight in vector.vector.items():
            matrix[row, vocabulary[term]] = weight

    norms = np.linalg.norm(matrix, axis=1, keepdims=True)
    # Zero-norm rows (empty vectors) stay zero: cosine 0 with everything.
    return np.divide(matrix, norms, out=np.zeros_like(matrix), where=norms > 0)
