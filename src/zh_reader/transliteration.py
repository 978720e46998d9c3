"""Pinyin transliteration backends."""

import logging
from abc import ABC, abstractmethod
from typing import List, NamedTuple, Union

from pypinyin import Style, lazy_pinyin, pinyin

logger = logging.getLogger(__name__)


class TransliterationError(Exception):
    """Raised when a transliteration backend fails."""

    pass


class Matched(NamedTuple):
    """Whole-sentence transliteration with exactly one syllable per character."""

    syllables: List[str]


class LengthMismatch(NamedTuple):
    """Whole-sentence transliteration that does not line up with the input characters."""

    expected: int
    actual: int


SentenceMatch = Union[Matched, LengthMismatch]


class Transliterator(ABC):
    """Abstract base class for pinyin backends."""

    @abstractmethod
    def transliterate(self, text: str) -> List[str]:
        """Transliterate a whole string, one tone-marked syllable per code point."""
        pass

    @abstractmethod
    def transliterate_character(self, char: str, heteronym: bool = False) -> List[str]:
        """Transliterate a single character, optionally with all of its readings."""
        pass

    @abstractmethod
    def get_backend_name(self) -> str:
        """Get the name of this backend."""
        pass


def _blank_slots(chars: str) -> List[str]:
    # one empty slot per code point keeps the output aligned with the input
    return [""] * len(chars)


class PypinyinTransliterator(Transliterator):
    """Transliterator backed by pypinyin's phrase dictionary."""

    def __init__(self, style: Style = Style.TONE):
        self.style = style

    def transliterate(self, text: str) -> List[str]:
        try:
            return lazy_pinyin(text, style=self.style, errors=_blank_slots)
        except Exception as e:
            raise TransliterationError(f"pypinyin failed for '{text}': {e}") from e

    def transliterate_character(self, char: str, heteronym: bool = False) -> List[str]:
        try:
            readings = pinyin(char, style=self.style, heteronym=heteronym, errors="ignore")
        except Exception as e:
            raise TransliterationError(f"pypinyin failed for '{char}': {e}") from e

        if not readings:
            return []
        return [reading for reading in readings[0] if reading]

    def get_backend_name(self) -> str:
        return "pypinyin"


def match_sentence(transliterator: Transliterator, sentence: str) -> SentenceMatch:
    """
    Transliterate a whole sentence and check that it lines up character by character.

    Args:
        transliterator: Backend to call
        sentence: Sentence text

    Returns:
        Matched with the syllables, or LengthMismatch with both lengths

    Raises:
        Whatever the backend raises; callers decide how to degrade.
    """
    expected = len(sentence)
    syllables = transliterator.transliterate(sentence)
    if not isinstance(syllables, (list, tuple)) or len(syllables) != expected:
        actual = len(syllables) if isinstance(syllables, (list, tuple)) else 0
        logger.debug(f"Transliteration of '{sentence}' returned {actual} syllables for {expected} characters")
        return LengthMismatch(expected=expected, actual=actual)
    return Matched(syllables=[str(s) for s in syllables])
