# content_recommender/infrastructure/token_filters.py

import re
from typing import FrozenSet, List, Optional

from content_recommender.domain.interfaces import TokenFilterPort
from content_recommender.domain.models import Morpheme
from content_recommender.domain.options import Language, TokenFilterOptions
from content_recommender.infrastructure.stopwords import load_default_stopwords
from content_recommender.infrastructure.tokenizers import NGRAM_SEPARATOR


SINGLE_HIRAGANA_PATTERN = re.compile(r"^[\u3042-\u3096]$")


class BaseTokenFilter(TokenFilterPort):
    """
    Length, stopword and duplicate filtering shared by every language.
    Subclasses choose the default stopword list through LANGUAGE.
    """

    LANGUAGE: Language

    def __init__(self, options: Optional[TokenFilterOptions] = None):
        self._options = options or TokenFilterOptions()
        self._stopwords = frozenset(
            load_default_stopwords(self.LANGUAGE.value) | set(self._options.custom_stop_words)
        )

    @property
    def options(self) -> TokenFilterOptions:
        return self._options

    @property
    def stopwords(self) -> FrozenSet[str]:
        return self._stopwords

    def filter(self, tokens: List[str]) -> List[str]:
        filtered = list(tokens)

        if self._options.min_token_length > 1:
            filtered = self._filter_by_length(filtered)

        if self._options.remove_stopwords:
            filtered = [token for token in filtered if token not in self._stopwords]

        if self._options.remove_duplicates:
            filtered = self._remove_duplicates(filtered)

        return filtered

    def _filter_by_length(self, tokens: List[str]) -> List[str]:
        return [token for token in tokens if len(token) >= self._options.min_token_length]

    @staticmethod
    def _remove_duplicates(tokens: List[str]) -> List[str]:
        # dict keeps first-seen order, which keeps TF-IDF tie-breaks reproducible
        return list(dict.fromkeys(tokens))


class EnglishTokenFilter(BaseTokenFilter):

    LANGUAGE = Language.ENGLISH

    def filter_with_ngrams(self, tokens: List[str]) -> List[str]:
        """
        Like filter(), but a bigram/trigram is dropped when any of its
        words is a stopword, even though the joined token itself never
        appears in the stopword list.
        """
        filtered = list(tokens)

        if self._options.min_token_length > 1:
            filtered = self._filter_by_length(filtered)

        if self._options.remove_stopwords:
            filtered = [token for token in filtered if not self._contains_stopword(token)]

        if self._options.remove_duplicates:
            filtered = self._remove_duplicates(filtered)

        return filtered

    def _contains_stopword(self, token: str) -> bool:
        return any(part in self._stopwords for part in token.split(NGRAM_SEPARATOR))


class JapaneseTokenFilter(BaseTokenFilter):

    LANGUAGE = Language.JAPANESE

    def filter_with_pos(self, morphemes: List[Morpheme]) -> List[str]:
        """
        Keep allowed parts of speech only, resolved to their base form.
        Single hiragana characters are treated as noise.
        """
        allowed_pos = set(self._options.allowed_pos)
        filtered = [
            morpheme.resolved_form
            for morpheme in morphemes
            if morpheme.pos in allowed_pos
            and len(morpheme.resolved_form) >= self._options.min_token_length
            and not SINGLE_HIRAGANA_PATTERN.match(morpheme.resolved_form)
        ]

        if self._options.remove_stopwords:
            filtered = [token for token in filtered if token not in self._stopwords]

        if self._options.remove_duplicates:
            filtered = self._remove_duplicates(filtered)

        return filtered
