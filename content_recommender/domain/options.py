# content_recommender/domain/options.py

import math
import sys
from enum import Enum
from typing import Any, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic.alias_generators import to_camel, to_snake

from .errors import ConfigurationError


class Language(str, Enum):
    ENGLISH = "en"
    JAPANESE = "ja"


SUPPORTED_LANGUAGES: Tuple[str, ...] = tuple(language.value for language in Language)

# Nouns, verbs and adjectives in IPADIC's top-level part-of-speech tags.
DEFAULT_ALLOWED_POS: Tuple[str, ...] = ("名詞", "動詞", "形容詞")


def _require_positive_int(value: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError("should be integer and greater than 0")
    return value


class _OptionsModel(BaseModel):
    # camelCase aliases: exported models may use maxVectorSize-style keys.
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class TokenFilterOptions(_OptionsModel):
    """
    Tuning knobs shared by every token filter.
    allowed_pos only applies to morphological (part-of-speech aware) filters.
    """
    remove_duplicates: bool = True
    remove_stopwords: bool = True
    custom_stop_words: Tuple[str, ...] = ()
    min_token_length: int = 1
    allowed_pos: Tuple[str, ...] = DEFAULT_ALLOWED_POS

    @field_validator("min_token_length", mode="before")
    @classmethod
    def _check_min_token_length(cls, value: Any) -> Any:
        return _require_positive_int(value)


class RecommenderOptions(_OptionsModel):
    """
    Validated, immutable recommender configuration.

    Build instances with RecommenderOptions.build() so that validation
    failures surface as ConfigurationError naming the offending field.
    """
    max_vector_size: int = 100
    max_similar_documents: int = sys.maxsize
    min_score: float = 0.0
    debug: bool = False
    language: Language = Language.ENGLISH
    token_filter_options: TokenFilterOptions = TokenFilterOptions()

    @field_validator("max_vector_size", "max_similar_documents", mode="before")
    @classmethod
    def _check_positive_int(cls, value: Any) -> Any:
        return _require_positive_int(value)

    @field_validator("min_score", mode="before")
    @classmethod
    def _check_min_score(cls, value: Any) -> Any:
        if (
            isinstance(value, bool)
            or not isinstance(value, (int, float))
            or math.isnan(value)
            or not 0 <= value <= 1
        ):
            raise ValueError("should be a number between 0 and 1")
        return value

    @field_validator("language", mode="before")
    @classmethod
    def _check_language(cls, value: Any) -> Any:
        if isinstance(value, Language):
            return value
        if value not in SUPPORTED_LANGUAGES:
            raise ValueError(
                f"should be one of: {', '.join(SUPPORTED_LANGUAGES)} (got {value!r})"
            )
        return value

    @classmethod
    def build(
        cls,
        overrides: Optional[Union["RecommenderOptions", Mapping[str, Any]]] = None,
    ) -> "RecommenderOptions":
        """Merge overrides over the defaults and validate the result."""
        if overrides is None:
            return cls()
        if isinstance(overrides, cls):
            return overrides
        if not isinstance(overrides, Mapping):
            raise ConfigurationError("options", "should be a mapping of option names to values")

        try:
            return cls.model_validate(dict(overrides))
        except ValidationError as error:
            raise _as_configuration_error(error) from error

    def to_dict(self) -> dict:
        """Plain, JSON-serializable representation."""
        return self.model_dump(mode="json")


def _as_configuration_error(error: ValidationError) -> ConfigurationError:
    first = error.errors()[0]
    field = ".".join(to_snake(str(part)) for part in first["loc"]) or "options"

    if first["type"] == "extra_forbidden":
        return ConfigurationError(field, "is not a recognized option")

    cause = first.get("ctx", {}).get("error")
    constraint = str(cause) if cause is not None else first["msg"]
    return ConfigurationError(field, constraint)
