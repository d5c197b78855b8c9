# content_recommender/domain/models.py

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional


# Sentinel used by IPADIC-style analyzers when a morpheme has no base form.
NULL_FORM_MARKER = "*"

# Input documents are plain mappings: {"id": ..., "content": ..., **extra}
Document = Mapping[str, Any]


@dataclass
class ProcessedDocument:
    """
    A document after tokenization and filtering, ready for vectorization.
    """
    id: str
    tokens: List[str]
    original_document: Document = field(repr=False)


@dataclass
class DocumentVector:
    """
    Sparse TF-IDF weights of one document: { term: weight }.
    """
    id: str
    vector: Dict[str, float]


@dataclass(frozen=True)
class SimilarDocument:
    """
    One neighbour in a document's ranked similarity list.
    """
    id: str
    score: float

    def to_dict(self) -> dict:
        return {"id": self.id, "score": self.score}

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "SimilarDocument":
        return cls(id=str(raw["id"]), score=float(raw["score"]))


@dataclass(frozen=True)
class Morpheme:
    """
    A single unit produced by morphological analysis.
    """
    pos: str
    surface_form: str
    basic_form: Optional[str] = None

    @property
    def resolved_form(self) -> str:
        """Base form when the analyzer knows it, otherwise the surface form."""
        if self.basic_form and self.basic_form != NULL_FORM_MARKER:
            return self.basic_form
        return self.surface_form


SimilarityTable = Dict[str, List[SimilarDocument]]
