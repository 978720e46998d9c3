"""Frequency-rank based difficulty analysis."""

import logging
from collections import Counter
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .characters import extract_hanzi
from .config import CUMULATIVE, LEVEL_NAMES, AnalysisConfig, ReaderConfig
from .frequency import FrequencyTable, load_frequency_table

logger = logging.getLogger(__name__)

MAX_DIFFICULTY = 5

DIFFICULTY_LABELS = {
    1: "入门",
    2: "初级",
    3: "中级",
    4: "高级",
    5: "专家",
}


class Level(str, Enum):
    """Frequency band of a character."""

    LEVEL_1 = "LEVEL_1"
    LEVEL_2 = "LEVEL_2"
    LEVEL_3 = "LEVEL_3"
    LEVEL_4 = "LEVEL_4"
    LEVEL_5 = "LEVEL_5"
    LEVEL_6 = "LEVEL_6"  # beyond the last bound, or not in the table


class DifficultyReport(BaseModel):
    """Result of analyzing one text."""

    model_config = ConfigDict(frozen=True)

    total_characters: int
    unique_characters: int
    character_levels: Dict[str, int]  # unique characters per level
    level_distribution: Dict[str, float]  # percentage of unique characters per level
    difficulty_score: int
    difficulty_level: int
    rule: str

    @property
    def label(self) -> str:
        return DIFFICULTY_LABELS[self.difficulty_level]

    def to_metadata(self) -> Dict[str, Any]:
        """Article metadata record in the persistence layer's field names."""
        return {
            "totalCharacters": self.total_characters,
            "uniqueCharacters": self.unique_characters,
            "characterLevels": dict(self.character_levels),
            "levelDistribution": dict(self.level_distribution),
            "difficultyScore": self.difficulty_score,
            "difficultyLevel": self.difficulty_level,
        }


class DifficultyAnalyzer:
    """Classify the lexical difficulty of a text against a frequency table."""

    def __init__(self, frequency_table: FrequencyTable, config: Optional[AnalysisConfig] = None):
        """
        Initialize the analyzer.

        Args:
            frequency_table: Loaded rank table, shared read-only between analyzers
            config: Level bounds, weights, threshold and level rule
        """
        self.frequency_table = frequency_table
        self.config = config or AnalysisConfig()

    @classmethod
    def from_config(cls, config: ReaderConfig) -> "DifficultyAnalyzer":
        """Load the configured (or packaged) table once and build an analyzer around it."""
        return cls(load_frequency_table(config.frequency_table), config.analysis)

    def rank_of(self, character: str) -> Optional[int]:
        return self.frequency_table.rank(character)

    def level_for_rank(self, rank: Optional[int]) -> Level:
        if rank is None:
            return Level.LEVEL_6
        for name, bound in zip(LEVEL_NAMES, self.config.level_bounds):
            if rank <= bound:
                return Level(name)
        return Level.LEVEL_6

    def level_of(self, character: str) -> Level:
        return self.level_for_rank(self.rank_of(character))

    def analyze(self, text: str) -> DifficultyReport:
        """
        Analyze the character difficulty of a text.

        Only CJK Unified Ideographs count; digits, Latin letters, emoji and
        punctuation are ignored entirely.

        Args:
            text: Raw text

        Returns:
            DifficultyReport for the text
        """
        hanzi = extract_hanzi(text)
        unique_chars = list(dict.fromkeys(hanzi))

        counts = {name: 0 for name in LEVEL_NAMES}
        for char in unique_chars:
            counts[self.level_of(char).value] += 1

        unique_count = len(unique_chars)
        if unique_count:
            distribution = _percentages(counts, unique_count)
        else:
            distribution = {name: 0.0 for name in LEVEL_NAMES}

        report = DifficultyReport(
            total_characters=len(hanzi),
            unique_characters=unique_count,
            character_levels=counts,
            level_distribution=distribution,
            difficulty_score=self._calculate_score(distribution),
            difficulty_level=self._calculate_level(distribution),
            rule=self.config.rule,
        )
        logger.debug(
            f"Analyzed {report.total_characters} characters ({report.unique_characters} unique): "
            f"level {report.difficulty_level}, score {report.difficulty_score}"
        )
        return report

    def character_breakdown(self, text: str) -> Dict[str, List[Tuple[str, int]]]:
        """
        Group the ideographs of a text by level with their occurrence counts.

        Args:
            text: Raw text

        Returns:
            Level name -> [(character, occurrences)] in encounter order
        """
        breakdown: Dict[str, List[Tuple[str, int]]] = {name: [] for name in LEVEL_NAMES}
        for char, count in Counter(extract_hanzi(text)).items():
            breakdown[self.level_of(char).value].append((char, count))
        return breakdown

    def _calculate_score(self, distribution: Dict[str, float]) -> int:
        # exact decimal arithmetic, halves round up
        total = sum(Decimal(str(distribution[name])) for name in LEVEL_NAMES)
        if total == 0:
            return 0
        weighted = sum(
            Decimal(str(distribution[name])) * Decimal(str(self.config.level_weights[name])) for name in LEVEL_NAMES
        )
        return int((weighted / total * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    def _calculate_level(self, distribution: Dict[str, float]) -> int:
        threshold = self.config.threshold
        cumulative = self.config.rule == CUMULATIVE

        if distribution["LEVEL_5"] + distribution["LEVEL_6"] > threshold:
            return MAX_DIFFICULTY

        # LEVEL_4 -> 4, LEVEL_3 -> 3, LEVEL_2 -> 2
        for level in range(4, 1, -1):
            bands = LEVEL_NAMES[level - 1:] if cumulative else [LEVEL_NAMES[level - 1]]
            if sum(distribution[name] for name in bands) > threshold:
                return level
        return 1


def cumulative_percentages(report: DifficultyReport) -> Dict[str, float]:
    """Share of unique characters at or above each of LEVEL_5..LEVEL_2."""
    distribution = report.level_distribution
    result = {}
    for start in range(5, 1, -1):
        total = sum(distribution[name] for name in LEVEL_NAMES[start - 1:])
        result[f"LEVEL_{start}-6"] = round(total, 1)
    return result


def difficulty_stars(level: int) -> str:
    """Star badge for a difficulty level, e.g. ★★☆☆☆ for level 2."""
    level = max(0, min(MAX_DIFFICULTY, level))
    return "★" * level + "☆" * (MAX_DIFFICULTY - level)


def _percentages(counts: Dict[str, int], total: int) -> Dict[str, float]:
    """
    Convert counts to one-decimal percentages that add up to exactly 100.

    Each share is truncated to tenths of a percent, then the missing tenths go
    to the levels with the largest remainders (lower levels first on ties).
    """
    tenths = {name: count * 1000 // total for name, count in counts.items()}
    remainders = {name: count * 1000 % total for name, count in counts.items()}
    shortfall = 1000 - sum(tenths.values())
    for name in sorted(counts, key=lambda name: -remainders[name])[:shortfall]:
        tenths[name] += 1
    return {name: tenths[name] / 10 for name in counts}
