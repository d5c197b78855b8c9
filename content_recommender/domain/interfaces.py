# content_recommender/domain/interfaces.py

from abc import ABC, abstractmethod
from typing import List, Optional

from .models import Document


class TokenizerPort(ABC):
    """
    Port for any tokenizer: raw text in, ordered lexical units out.
    """

    @abstractmethod
    async def tokenize(self, text: str) -> List[str]: ...


class TokenFilterPort(ABC):

    @abstractmethod
    def filter(self, tokens: List[str]) -> List[str]: ...


class ProcessingPipelinePort(ABC):
    """
    A (tokenizer, filter) pair for one language.

    extract_terms() is the only entry point the preprocessor uses; each
    pipeline decides which enrichment path (n-gram or part-of-speech
    filtering) turns text into terms.
    """

    tokenizer: TokenizerPort
    filter: TokenFilterPort

    @abstractmethod
    async def extract_terms(self, text: str) -> List[str]: ...


class ModelStorePort(ABC):

    @abstractmethod
    def save(self, model: dict) -> None: ...

    @abstractmethod
    def load(self) -> Optional[dict]:
        """
        Return the previously saved {options, data} structure,
        or None when nothing has been saved yet.
        """
        ...

    @abstractmethod
    def exists(self) -> bool: ...


class DocumentSourcePort(ABC):

    @abstractmethod
    def load_file(self, file_path) -> List[Document]: ...
