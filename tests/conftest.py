# tests/conftest.py

from types import SimpleNamespace

import pytest


@pytest.fixture
def sample_documents() -> list:
    return [
        {"id": "1000001", "content": "Why studying javascript is fun?"},
        {"id": "1000002", "content": "The trend for javascript in machine learning"},
        {"id": "1000003", "content": "The most insightful stories about JavaScript"},
        {"id": "1000004", "content": "Introduction to Machine Learning"},
        {"id": "1000005", "content": "Machine learning and its application"},
        {"id": "1000006", "content": "Python vs Javascript, which is better?"},
        {"id": "1000007", "content": "How Python saved my life?"},
        {"id": "1000008", "content": "The future of Bitcoin technology"},
        {"id": "1000009", "content": "Is it possible to use javascript for machine learning?"},
    ]


@pytest.fixture
def sample_tags() -> list:
    return [
        {"id": "1", "content": "Javascript"},
        {"id": "2", "content": "machine learning"},
        {"id": "3", "content": "application"},
        {"id": "4", "content": "introduction"},
        {"id": "5", "content": "future"},
        {"id": "6", "content": "Python"},
        {"id": "7", "content": "Bitcoin"},
    ]


def make_analyzer(morphemes_by_text: dict):
    """
    Stand-in for a janome Tokenizer: tokenize(text) returns objects with
    surface / part_of_speech / base_form attributes.
    """
    class FakeAnalyzer:
        def tokenize(self, text):
            return [
                SimpleNamespace(surface=surface, part_of_speech=pos, base_form=base)
                for surface, pos, base in morphemes_by_text.get(text, [])
            ]

    return FakeAnalyzer()
