# content_recommender/infrastructure/pipeline_factory.py
# The only place that branches on language.

from typing import Optional, Union

from content_recommender.domain.errors import UnsupportedLanguageError
from content_recommender.domain.interfaces import ProcessingPipelinePort, TokenizerPort
from content_recommender.domain.options import SUPPORTED_LANGUAGES, Language, TokenFilterOptions
from content_recommender.infrastructure.pipelines import LatinScriptPipeline, MorphologicalPipeline
from content_recommender.infrastructure.token_filters import EnglishTokenFilter, JapaneseTokenFilter
from content_recommender.infrastructure.tokenizers import EnglishTokenizer, JapaneseTokenizer


def _resolve_language(language: Union[Language, str]) -> Language:
    try:
        return Language(language)
    except ValueError:
        raise UnsupportedLanguageError(language, SUPPORTED_LANGUAGES) from None


def create_tokenizer(language: Union[Language, str] = Language.ENGLISH) -> TokenizerPort:
    if _resolve_language(language) is Language.JAPANESE:
        return JapaneseTokenizer()
    return EnglishTokenizer()


def create_pipeline(
    language: Union[Language, str] = Language.ENGLISH,
    filter_options: Optional[TokenFilterOptions] = None,
) -> ProcessingPipelinePort:
    """
    Build a fresh (tokenizer, filter) pipeline for a language tag.

    Raises:
        UnsupportedLanguageError: the tag is not one of SUPPORTED_LANGUAGES.
    """
    filter_options = filter_options or TokenFilterOptions()

    if _resolve_language(language) is Language.JAPANESE:
        return MorphologicalPipeline(JapaneseTokenizer(), JapaneseTokenFilter(filter_options))

    token_filter = EnglishTokenFilter(filter_options)
    stopwords = token_filter.stopwords if filter_options.remove_stopwords else ()
    return LatinScriptPipeline(EnglishTokenizer(stopwords), token_filter)
