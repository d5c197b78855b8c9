# content_recommender/infrastructure/stopwords.py

import json
from functools import lru_cache
from pathlib import Path
from typing import FrozenSet


STOPWORDS_DIRECTORY = Path(__file__).parent / "data"


@lru_cache(maxsize=None)
def load_default_stopwords(language: str) -> FrozenSet[str]:
    """
    Load the bundled stopword list for a language tag ('en', 'ja').
    Lists are read once and shared by every filter instance.
    """
    path = STOPWORDS_DIRECTORY / f"stopwords-{language}.json"
    if not path.exists():
        raise FileNotFoundError(f"No stopword list bundled for language '{language}': {path}")

    with open(path, "r", encoding="utf-8") as f:
        return frozenset(json.load(f))
