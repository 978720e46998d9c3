"""Pinyin annotation and character-frequency difficulty scoring for Chinese reading material."""

from .difficulty import DifficultyAnalyzer, DifficultyReport, Level
from .frequency import FrequencyEntry, FrequencyTable, load_frequency_table
from .segmenter import (
    CharacterToken,
    Resolution,
    SentenceResult,
    SentenceSegmenter,
    process_chinese_text,
    process_sentence,
    sentence_split,
)

__all__ = [
    "CharacterToken",
    "DifficultyAnalyzer",
    "DifficultyReport",
    "FrequencyEntry",
    "FrequencyTable",
    "Level",
    "Resolution",
    "SentenceResult",
    "SentenceSegmenter",
    "load_frequency_table",
    "process_chinese_text",
    "process_sentence",
    "sentence_split",
]
