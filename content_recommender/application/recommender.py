# content_recommender/application/recommender.py

import asyncio
import math
from typing import Any, Callable, List, Mapping, Optional, Sequence, Union

from content_recommender.application.preprocessor import DocumentPreprocessor
from content_recommender.application.similarity import SimilarityEngine, rank_similarities
from content_recommender.application.vectorizer import TfIdfVectorizer
from content_recommender.domain.errors import InvalidInputError
from content_recommender.domain.interfaces import ProcessingPipelinePort
from content_recommender.domain.models import Document, SimilarDocument, SimilarityTable
from content_recommender.domain.options import RecommenderOptions
from content_recommender.infrastructure.pipeline_factory import create_pipeline


RESERVED_FIELDS = ("tokens", "vector")

PipelineFactory = Callable[..., ProcessingPipelinePort]
OptionsInput = Optional[Union[RecommenderOptions, Mapping[str, Any]]]


class ContentBasedRecommender:
    """
    Core use case: for every document, a ranked list of the most similar
    documents by TF-IDF weighted cosine similarity.

    Lifecycle:
    - configure() validates options; the language pipeline is rebuilt only
      when the language or filter options change
    - train() / train_bidirectional() recompute the whole similarity table
    - get_similar_documents() reads it; export() / import_model() persist it

    A failed training call leaves the previous table untouched.
    """

    def __init__(
        self,
        options: OptionsInput = None,
        pipeline_factory: PipelineFactory = create_pipeline,
    ):
        self._pipeline_factory = pipeline_factory
        self._options: Optional[RecommenderOptions] = None
        self._pipeline: Optional[ProcessingPipelinePort] = None
        self._data: SimilarityTable = {}
        self._training_lock = asyncio.Lock()
        self.configure(options)

    @property
    def options(self) -> RecommenderOptions:
        return self._options

    @property
    def pipeline(self) -> ProcessingPipelinePort:
        return self._pipeline

    @property
    def document_ids(self) -> List[str]:
        """Ids with an entry in the current similarity table."""
        return list(self._data)

    def configure(self, options: OptionsInput = None) -> None:
        """
        Validate options (merged over the defaults) and apply them.

        Raises:
            ConfigurationError: an option is out of range or unknown.
        """
        new_options = RecommenderOptions.build(options)
        self._apply_options(new_options)

    set_options = configure

    # ─── Training ─────────────────────────────────────────────────────────────

    async def train(self, documents: Sequence[Document]) -> None:
        """Similarity between every pair of documents of one collection."""
        self.validate_documents(documents)

        async with self._training_lock:
            options = self._options
            self._log(f"Total documents: {len(documents)}")

            preprocessor = DocumentPreprocessor(self._pipeline)
            self._log("Preprocessing documents")
            processed = await preprocessor.process(documents)

            self._log("Creating word vectors")
            vectors = TfIdfVectorizer(options.max_vector_size).transform(processed)

            self._log("Calculating similarity scores")
            table = SimilarityEngine(options.min_score).within(vectors)
            self._data = rank_similarities(table, options.max_similar_documents)

    async def train_bidirectional(
        self,
        documents: Sequence[Document],
        target_documents: Sequence[Document],
    ) -> None:
        """
        Similarity between two collections (e.g. posts and tags) only.
        Each collection is vectorized against its own document frequencies.
        """
        self.validate_documents(documents)
        self.validate_documents(target_documents)
        _reject_colliding_ids(documents, target_documents)

        async with self._training_lock:
            options = self._options
            self._log(
                f"Total documents: {len(documents)}, "
                f"target documents: {len(target_documents)}"
            )

            preprocessor = DocumentPreprocessor(self._pipeline)
            self._log("Preprocessing documents")
            processed, processed_targets = await asyncio.gather(
                preprocessor.process(documents),
                preprocessor.process(target_documents),
            )

            self._log("Creating word vectors")
            vectorizer = TfIdfVectorizer(options.max_vector_size)
            vectors = vectorizer.transform(processed)
            target_vectors = vectorizer.transform(processed_targets)

            self._log("Calculating similarity scores")
            table = SimilarityEngine(options.min_score).between(vectors, target_vectors)
            self._data = rank_similarities(table, options.max_similar_documents)

    @staticmethod
    def validate_documents(documents: Sequence[Document]) -> None:
        """
        Raises:
            InvalidInputError: not a sequence of records with id and content,
                a reserved field is used, or an id appears twice.
        """
        if isinstance(documents, (str, bytes, Mapping)) or not isinstance(documents, Sequence):
            raise InvalidInputError("Documents should be a list of document records")

        seen_ids = set()
        for position, document in enumerate(documents):
            if not isinstance(document, Mapping) or "id" not in document or "content" not in document:
                raise InvalidInputError(
                    f"Documents should have fields id and content (document #{position})"
                )

            if any(field in document for field in RESERVED_FIELDS):
                raise InvalidInputError(
                    '"tokens" and "vector" properties are reserved '
                    "and cannot be used as document properties"
                )

            document_id = document["id"]
            if isinstance(document_id, bool) or not isinstance(document_id, (str, int)):
                raise InvalidInputError(
                    f"Document id should be a string, got {type(document_id).__name__}"
                )
            if not isinstance(document["content"], str):
                raise InvalidInputError(f"Content of document '{document_id}' should be a string")

            if str(document_id) in seen_ids:
                raise InvalidInputError(f"Duplicate document id '{document_id}'")
            seen_ids.add(str(document_id))

    # ─── Queries ──────────────────────────────────────────────────────────────

    def get_similar_documents(
        self,
        document_id: Union[str, int],
        start: int = 0,
        size: Optional[int] = None,
    ) -> List[SimilarDocument]:
        """
        Slice [start, start + size) of the ranked list for document_id.
        Unknown ids yield an empty list.
        """
        if start < 0 or (size is not None and size < 0):
            raise ValueError("start and size cannot be negative")

        similar_documents = self._data.get(str(document_id))
        if similar_documents is None:
            return []

        end = start + size if size is not None else None
        return similar_documents[start:end]

    # ─── Persistence ──────────────────────────────────────────────────────────

    def export(self) -> dict:
        """Plain {options, data} structure, safe to serialize as JSON."""
        return {
            "options": self._options.to_dict(),
            "data": {
                document_id: [entry.to_dict() for entry in entries]
                for document_id, entries in self._data.items()
            },
        }

    def import_model(self, model: Mapping[str, Any]) -> None:
        """
        Restore an exported model. Both keys are optional: options are merged
        over the defaults, data replaces the similarity table.
        """
        if not isinstance(model, Mapping):
            raise InvalidInputError("Model should be a mapping with options and/or data")

        options = model.get("options")
        data = model.get("data")

        new_options = RecommenderOptions.build(options) if options is not None else None
        new_data = _parse_table(data) if data is not None else None

        if new_options is not None:
            self._apply_options(new_options)
        if new_data is not None:
            self._data = new_data

    # ─── Private ──────────────────────────────────────────────────────────────

    def _apply_options(self, new_options: RecommenderOptions) -> None:
        previous = self._options
        rebuild = (
            self._pipeline is None
            or previous.language != new_options.language
            or previous.token_filter_options != new_options.token_filter_options
        )
        if rebuild:
            self._pipeline = self._pipeline_factory(
                new_options.language, new_options.token_filter_options
            )
        self._options = new_options

    def _log(self, message: str) -> None:
        if self._options.debug:
            print(f"[Recommender] {message}")


def _reject_colliding_ids(documents: Sequence[Document], target_documents: Sequence[Document]) -> None:
    colliding = {str(d["id"]) for d in documents} & {str(d["id"]) for d in target_documents}
    if colliding:
        raise InvalidInputError(
            f"Source and target documents should not share ids: {sorted(colliding)[:5]}"
        )


def _parse_table(data: Any) -> SimilarityTable:
    if not isinstance(data, Mapping):
        raise InvalidInputError("Model data should map document ids to similar documents")

    table: SimilarityTable = {}
    for document_id, entries in data.items():
        if isinstance(entries, (str, bytes, Mapping)) or not isinstance(entries, Sequence):
            raise InvalidInputError(f"Similar documents of '{document_id}' should be a list")
        table[str(document_id)] = [_parse_entry(document_id, entry) for entry in entries]
    return table


def _parse_entry(document_id: Any, entry: Any) -> SimilarDocument:
    if isinstance(entry, SimilarDocument):
        similar = entry
    elif isinstance(entry, Mapping) and "id" in entry and "score" in entry:
        try:
            similar = SimilarDocument.from_dict(entry)
        except (TypeError, ValueError) as error:
            raise InvalidInputError(
                f"Malformed similar document entry for '{document_id}': {error}"
            ) from error
    else:
        raise InvalidInputError(f"Malformed similar document entry for '{document_id}'")

    # Scores of a trained model are cosines strictly above min_score >= 0.
    if not (math.isfinite(similar.score) and 0 < similar.score <= 1):
        raise InvalidInputError(
            f"Score of '{similar.id}' in the list of '{document_id}' "
            f"should be a number in (0, 1], got {similar.score!r}"
        )
    return similar
