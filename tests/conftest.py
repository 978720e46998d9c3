"""Shared fixtures for zh_reader tests."""

from typing import Dict, List, Optional

import pytest

from zh_reader.frequency import FrequencyTable, load_frequency_table
from zh_reader.transliteration import Transliterator


def codepoint_char(rank: int) -> str:
    """Character that holds ``rank`` in the code point ordered test table."""
    return chr(0x4E00 + rank - 1)


class ScriptedTransliterator(Transliterator):
    """Transliterator returning canned answers, recording every call."""

    def __init__(
        self,
        sentence_result: Optional[List[str]] = None,
        char_readings: Optional[Dict[str, object]] = None,
        sentence_error: Optional[Exception] = None,
        char_error: Optional[Exception] = None,
    ):
        self.sentence_result = sentence_result
        self.char_readings = char_readings or {}
        self.sentence_error = sentence_error
        self.char_error = char_error
        self.sentence_calls: List[str] = []
        self.char_calls: List[tuple] = []

    def transliterate(self, text: str) -> List[str]:
        self.sentence_calls.append(text)
        if self.sentence_error:
            raise self.sentence_error
        if self.sentence_result is None:
            return ["x"] * len(text)
        return self.sentence_result

    def transliterate_character(self, char: str, heteronym: bool = False) -> List[str]:
        self.char_calls.append((char, heteronym))
        if self.char_error:
            raise self.char_error
        return self.char_readings.get(char, ["?"])

    def get_backend_name(self) -> str:
        return "scripted"


@pytest.fixture(scope="session")
def packaged_table() -> FrequencyTable:
    """The frequency table shipped with the package."""
    return load_frequency_table()


@pytest.fixture
def codepoint_table() -> FrequencyTable:
    """3000 ideographs ranked by code point, so U+4E00 + n has rank n + 1."""
    return FrequencyTable.from_characters(codepoint_char(rank) for rank in range(1, 3001))
