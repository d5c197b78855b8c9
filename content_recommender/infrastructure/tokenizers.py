# content_recommender/infrastructure/tokenizers.py

import asyncio
import re
import threading
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional

from nltk.stem.porter import PorterStemmer
from nltk.tokenize import RegexpTokenizer
from nltk.util import ngrams

from content_recommender.domain.errors import InitializationError
from content_recommender.domain.interfaces import TokenizerPort
from content_recommender.domain.models import Morpheme


# Joins the words of a bigram/trigram; never produced by the word tokenizer.
NGRAM_SEPARATOR = "_"

MARKUP_PATTERN = re.compile(r"<[^>]*>")

_STEMMER = PorterStemmer()
_WORD_TOKENIZER = RegexpTokenizer(r"[^\W_]+")


def strip_markup(text: str) -> str:
    """Replace every markup tag with a space so adjacent words stay apart."""
    return MARKUP_PATTERN.sub(" ", text)


def stem(word: str) -> str:
    return _STEMMER.stem(word)


class EnglishTokenizer(TokenizerPort):
    """
    Latin-script tokenizer: stemmed unigrams, then bigrams, then trigrams.

    "machine learning models" ->
        ["machin", "learn", "model", "machin_learn", "learn_model",
         "machin_learn_model"]

    Words listed in stopwords are kept unstemmed, so a filter can match them
    against its raw list without also catching content words that share a
    stem ("was" -> "wa", "any" -> "ani").
    """

    def __init__(self, stopwords: Iterable[str] = ()):
        self._stopwords = frozenset(stopwords)

    async def tokenize(self, text: str) -> List[str]:
        words = _WORD_TOKENIZER.tokenize(strip_markup(text).lower())
        if not words:
            return []

        stems = [word if word in self._stopwords else stem(word) for word in words]
        bigrams = [NGRAM_SEPARATOR.join(gram) for gram in ngrams(stems, 2)]
        trigrams = [NGRAM_SEPARATOR.join(gram) for gram in ngrams(stems, 3)]

        return stems + bigrams + trigrams


# ─── Morphological Analysis ───────────────────────────────────────────────────

_ANALYZER_LOCK = threading.Lock()
_shared_analyzer = None


def build_janome_analyzer():
    """
    Build (once per process) the janome analyzer with its bundled IPADIC
    dictionary. The analyzer is read-only after construction and is shared
    by every JapaneseTokenizer.
    """
    global _shared_analyzer

    with _ANALYZER_LOCK:
        if _shared_analyzer is None:
            from janome.tokenizer import Tokenizer

            _shared_analyzer = Tokenizer()
        return _shared_analyzer


class LoaderState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"


class DictionaryLoader:
    """
    Lazy, memoized, asynchronous construction of a morphological analyzer.

    UNINITIALIZED -> INITIALIZING -> READY
                                  -> FAILED -> (reset) -> UNINITIALIZED

    Every caller that arrives while INITIALIZING awaits the same build and
    receives the same outcome. A failed build is reported as the same
    InitializationError to every later caller until reset() is called.
    """

    def __init__(self, builder: Callable[[], Any] = build_janome_analyzer):
        self._builder = builder
        self._state = LoaderState.UNINITIALIZED
        self._analyzer: Any = None
        self._error: Optional[InitializationError] = None
        self._pending: Optional[asyncio.Task] = None

    @property
    def state(self) -> LoaderState:
        return self._state

    async def acquire(self) -> Any:
        if self._state is LoaderState.READY:
            return self._analyzer
        if self._state is LoaderState.FAILED:
            raise self._error

        if self._state is LoaderState.UNINITIALIZED:
            self._state = LoaderState.INITIALIZING
            self._pending = asyncio.ensure_future(self._initialize())

        # Shielded so one cancelled waiter does not abort the shared build.
        return await asyncio.shield(self._pending)

    def reset(self) -> None:
        """Allow a new build attempt after a failure."""
        if self._state is LoaderState.FAILED:
            self._state = LoaderState.UNINITIALIZED
            self._error = None
            self._pending = None

    async def _initialize(self) -> Any:
        loop = asyncio.get_running_loop()
        try:
            analyzer = await loop.run_in_executor(None, self._builder)
        except Exception as error:
            self._error = InitializationError(
                f"Failed to initialize morphological analyzer: {error}"
            )
            self._error.__cause__ = error
            self._state = LoaderState.FAILED
            raise self._error

        self._analyzer = analyzer
        self._state = LoaderState.READY
        return analyzer


class JapaneseTokenizer(TokenizerPort):
    """
    Morphological tokenizer for text without whitespace word boundaries.
    tokenize() yields base forms; get_detailed_tokens() exposes the
    part-of-speech information of the same analysis.
    """

    def __init__(self, loader: Optional[DictionaryLoader] = None):
        self._loader = loader or DictionaryLoader()

    @property
    def loader(self) -> DictionaryLoader:
        return self._loader

    async def tokenize(self, text: str) -> List[str]:
        morphemes = await self.get_detailed_tokens(text)
        return [morpheme.resolved_form for morpheme in morphemes]

    async def get_detailed_tokens(self, text: str) -> List[Morpheme]:
        analyzer = await self._loader.acquire()

        clean_text = strip_markup(text).strip()
        if not clean_text:
            return []

        return [
            Morpheme(
                # IPADIC tags look like "名詞,固有名詞,組織,*"; keep the top level.
                pos=token.part_of_speech.split(",")[0],
                surface_form=token.surface,
                basic_form=token.base_form,
            )
            for token in analyzer.tokenize(clean_text)
        ]
