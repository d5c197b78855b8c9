# content_recommender/domain/errors.py


class RecommenderError(Exception):
    """Base class for every failure raised by the recommender."""


class ConfigurationError(RecommenderError, ValueError):
    """An option value failed validation."""

    def __init__(self, field: str, constraint: str):
        self.field = field
        self.constraint = constraint
        super().__init__(f"The option {field} {constraint}")


class InvalidInputError(RecommenderError, ValueError):
    """A document collection passed to training is malformed."""


class InitializationError(RecommenderError, RuntimeError):
    """A tokenizer dictionary/model could not be built."""


class UnsupportedLanguageError(RecommenderError, ValueError):

    def __init__(self, language, supported):
        self.language = language
        self.supported = tuple(supported)
        super().__init__(
            f"Unsupported language: {language!r}. "
            f"Supported languages: {', '.join(self.supported)}"
        )
