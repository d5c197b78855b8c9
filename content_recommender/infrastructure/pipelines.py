# content_recommender/infrastructure/pipelines.py

from typing import List

from content_recommender.domain.interfaces import ProcessingPipelinePort
from content_recommender.infrastructure.token_filters import EnglishTokenFilter, JapaneseTokenFilter
from content_recommender.infrastructure.tokenizers import EnglishTokenizer, JapaneseTokenizer


class LatinScriptPipeline(ProcessingPipelinePort):
    """Stemmed n-grams filtered with n-gram-aware stopword removal."""

    def __init__(self, tokenizer: EnglishTokenizer, token_filter: EnglishTokenFilter):
        self.tokenizer = tokenizer
        self.filter = token_filter

    async def extract_terms(self, text: str) -> List[str]:
        tokens = await self.tokenizer.tokenize(text)
        return self.filter.filter_with_ngrams(tokens)


class MorphologicalPipeline(ProcessingPipelinePort):
    """Morphemes filtered by part of speech before stopword removal."""

    def __init__(self, tokenizer: JapaneseTokenizer, token_filter: JapaneseTokenFilter):
        self.tokenizer = tokenizer
        self.filter = token_filter

    async def extract_terms(self, text: str) -> List[str]:
        morphemes = await self.tokenizer.get_detailed_tokens(text)
        return self.filter.filter_with_pos(morphemes)
