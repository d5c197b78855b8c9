# content_recommender/application/vectorizer.py

from collections import Counter
from typing import Dict, List, Sequence

import numpy as np

from content_recommender.domain.models import DocumentVector, ProcessedDocument


class TfIdfVectorizer:
    """
    Builds one TF-IDF model over a corpus and keeps, per document, only its
    strongest terms.

        tf(t, d)  = occurrences of t in d
        idf(t)    = 1 + ln(N / (1 + df(t)))
        w(t, d)   = tf(t, d) * idf(t)

    Each call to transform() is its own document-frequency universe.
    """

    def __init__(self, max_vector_size: int = 100):
        if max_vector_size <= 0:
            raise ValueError("max_vector_size must be greater than 0")
        self._max_vector_size = max_vector_size

    def transform(self, documents: Sequence[ProcessedDocument]) -> List[DocumentVector]:
        # Counter keeps first-occurrence order: the tie-break for equal weights.
        term_counts = [Counter(document.tokens) for document in documents]
        idf = self._inverse_document_frequencies(term_counts)

        return [
            DocumentVector(id=document.id, vector=self._top_terms(counts, idf))
            for document, counts in zip(documents, term_counts)
        ]

    @staticmethod
    def _inverse_document_frequencies(term_counts: List[Counter]) -> Dict[str, float]:
        document_frequency: Counter = Counter()
        for counts in term_counts:
            document_frequency.update(counts.keys())

        if not document_frequency:
            return {}

        terms = list(document_frequency)
        df = np.fromiter((document_frequency[t] for t in terms), dtype=np.float64, count=len(terms))
        idf = 1.0 + np.log(len(term_counts) / (1.0 + df))
        return dict(zip(terms, idf.tolist()))

    def _top_terms(self, counts: Counter, idf: Dict[str, float]) -> Dict[str, float]:
        if not counts:
            return {}

        terms = list(counts)
        tf = np.fromiter(counts.values(), dtype=np.float64, count=len(terms))
        weights = tf * np.array([idf[t] for t in terms])

        # Stable sort on the negated weights keeps discovery order among ties.
        top_indices = np.argsort(-weights, kind="stable")[: self._max_vector_size]
        return {terms[i]: float(weights[i]) for i in top_indices}
