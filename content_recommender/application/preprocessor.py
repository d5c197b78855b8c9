# content_recommender/application/preprocessor.py

import asyncio
from typing import List, Sequence

from content_recommender.domain.interfaces import ProcessingPipelinePort
from content_recommender.domain.models import Document, ProcessedDocument


class DocumentPreprocessor:
    """
    Maps every document's content through a language pipeline.

    Documents are independent of each other, so their term extraction runs
    concurrently; the first failure aborts the whole batch.
    """

    def __init__(self, pipeline: ProcessingPipelinePort):
        self._pipeline = pipeline

    async def process(self, documents: Sequence[Document]) -> List[ProcessedDocument]:
        token_lists = await asyncio.gather(
            *(self._pipeline.extract_terms(document["content"]) for document in documents)
        )

        return [
            ProcessedDocument(id=str(document["id"]), tokens=tokens, original_document=document)
            for document, tokens in zip(documents, token_lists)
        ]
