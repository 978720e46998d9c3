"""Sentence segmentation and per-character pinyin annotation."""

import logging
import re
from enum import Enum
from functools import lru_cache
from typing import Dict, List, NamedTuple, Optional, Tuple

from .characters import is_hanzi
from .config import SegmentationConfig
from .transliteration import LengthMismatch, PypinyinTransliterator, Transliterator, match_sentence

logger = logging.getLogger(__name__)

NO_PINYIN: Tuple[str, ...] = ("",)


class CharacterToken(NamedTuple):
    """One rendering unit: a character and its pinyin."""

    characters: str
    pinyin: Tuple[str, ...]  # never empty, ("",) for non-Chinese characters
    meaning: str = ""

    def to_dict(self) -> Dict[str, object]:
        """Plain dict for JSON consumers."""
        return {"characters": self.characters, "pinyin": list(self.pinyin), "meaning": self.meaning}


class Resolution(str, Enum):
    """How the pinyin of a sentence was resolved."""

    CONTEXT = "context"  # whole-sentence lookup, heteronyms resolved by context
    FALLBACK = "fallback"  # character-by-character lookup


class SentenceResult(NamedTuple):
    """Tokens of one sentence together with how they were resolved."""

    sentence: str
    tokens: List[CharacterToken]
    resolution: Resolution


class SentenceSegmenter:
    """Split text into sentences and annotate every character with pinyin."""

    def __init__(
        self,
        transliterator: Optional[Transliterator] = None,
        config: Optional[SegmentationConfig] = None,
    ):
        """
        Initialize the segmenter.

        Args:
            transliterator: Pinyin backend (defaults to pypinyin)
            config: Delimiters and fallback settings
        """
        self.transliterator = transliterator or PypinyinTransliterator()
        self.config = config or SegmentationConfig()
        self._delimiter_pattern = re.compile(f"([{re.escape(self.config.delimiters)}])")

    def sentence_split(self, text: str) -> List[str]:
        """
        Split text on terminal punctuation, keeping each delimiter on its sentence.

        Trailing text without a delimiter is returned as the last sentence.
        """
        if not text:
            return []

        parts = self._delimiter_pattern.split(text)

        sentences = []
        # Rejoin sentences with their punctuation
        for i in range(0, len(parts), 2):
            sentence = parts[i]
            if i + 1 < len(parts):
                sentence += parts[i + 1]
            if sentence:
                sentences.append(sentence)

        return sentences

    def segment_sentence(self, sentence: str) -> SentenceResult:
        """
        Annotate one sentence, reporting whether context or fallback resolution was used.

        Args:
            sentence: Sentence text

        Returns:
            SentenceResult with one token per code point
        """
        try:
            match = match_sentence(self.transliterator, sentence)
        except Exception as e:
            logger.warning(
                f"{self.transliterator.get_backend_name()} failed on a sentence, falling back to single characters: {e}"
            )
            match = None

        if match is None or isinstance(match, LengthMismatch):
            return SentenceResult(sentence, self._fallback_tokens(sentence), Resolution.FALLBACK)

        tokens = [
            CharacterToken(char, (syllable,) if is_hanzi(char) else NO_PINYIN)
            for char, syllable in zip(sentence, match.syllables)
        ]
        logger.debug(f"Resolved '{sentence}' by context")
        return SentenceResult(sentence, tokens, Resolution.CONTEXT)

    def process_sentence(self, sentence: str) -> List[CharacterToken]:
        """Annotate one sentence and return its tokens."""
        return self.segment_sentence(sentence).tokens

    def segment(self, text: str) -> List[SentenceResult]:
        """Split and annotate text, keeping per-sentence resolution."""
        return [self.segment_sentence(sentence) for sentence in self.sentence_split(text)]

    def process_chinese_text(self, text: str) -> List[CharacterToken]:
        """
        Turn raw text into one token per code point, in order.

        Args:
            text: Raw article text

        Returns:
            List of tokens; empty for empty input
        """
        tokens: List[CharacterToken] = []
        for result in self.segment(text):
            tokens.extend(result.tokens)
        return tokens

    def _fallback_tokens(self, sentence: str) -> List[CharacterToken]:
        return [CharacterToken(char, self._character_pinyin(char)) for char in sentence]

    def _character_pinyin(self, char: str) -> Tuple[str, ...]:
        if not is_hanzi(char):
            return NO_PINYIN

        try:
            readings = self.transliterator.transliterate_character(char, heteronym=self.config.heteronym_fallback)
        except Exception as e:
            logger.warning(f"No pinyin for '{char}': {e}")
            return NO_PINYIN

        if not isinstance(readings, (list, tuple)) or not readings:
            return NO_PINYIN
        return tuple(str(reading) for reading in readings)


@lru_cache(maxsize=1)
def _default_segmenter() -> SentenceSegmenter:
    return SentenceSegmenter()


def sentence_split(text: str) -> List[str]:
    """Split text into sentences with the default delimiters."""
    return _default_segmenter().sentence_split(text)


def process_sentence(sentence: str) -> List[CharacterToken]:
    """Annotate one sentence with the default pypinyin backend."""
    return _default_segmenter().process_sentence(sentence)


def process_chinese_text(text: str) -> List[CharacterToken]:
    """Annotate text with the default pypinyin backend."""
    return _default_segmenter().process_chinese_text(text)
