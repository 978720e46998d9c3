"""Character frequency rank table."""

import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, Tuple, Union

import pandas as pd

logger = logging.getLogger(__name__)

DEFAULT_TABLE_PATH = Path(__file__).parent / "data" / "hanzi_ranks.csv"


class FrequencyTableError(Exception):
    """Raised when a frequency table is missing, unreadable or inconsistent."""

    pass


class FrequencyEntry(NamedTuple):
    """One ideograph and its 1-based frequency rank."""

    rank: int
    character: str


class FrequencyTable:
    """
    Read-only lookup from ideograph to frequency rank.

    Ranks are unique and dense starting at 1. Characters absent from the
    table have no rank; the analyzer treats them as maximally rare.
    """

    def __init__(self, entries: Iterable[FrequencyEntry] = ()):
        ordered = sorted(entries, key=lambda entry: entry.rank)
        ranks: Dict[str, int] = {}

        for expected, entry in enumerate(ordered, start=1):
            if len(entry.character) != 1:
                raise FrequencyTableError(f"Expected a single character, got '{entry.character}' at rank {entry.rank}")
            if entry.rank != expected:
                raise FrequencyTableError(f"Ranks must be dense from 1: expected {expected}, got {entry.rank}")
            if entry.character in ranks:
                raise FrequencyTableError(
                    f"Character '{entry.character}' ranked twice ({ranks[entry.character]} and {entry.rank})"
                )
            ranks[entry.character] = entry.rank

        self._ranks = ranks
        self._entries: Tuple[FrequencyEntry, ...] = tuple(ordered)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, int]]) -> "FrequencyTable":
        """Build a table from ``(character, rank)`` pairs."""
        return cls(FrequencyEntry(rank=int(rank), character=char) for char, rank in pairs)

    @classmethod
    def from_characters(cls, characters: Iterable[str]) -> "FrequencyTable":
        """Build a table ranking characters in the order given, most frequent first."""
        return cls(FrequencyEntry(rank=i, character=char) for i, char in enumerate(characters, start=1))

    @classmethod
    def from_csv(cls, path: Union[str, Path]) -> "FrequencyTable":
        """
        Load a table from a CSV file with ``character`` and ``rank`` columns.

        Args:
            path: Path to the CSV file

        Returns:
            Loaded frequency table

        Raises:
            FrequencyTableError: If the file is missing, unreadable or inconsistent
        """
        try:
            df = pd.read_csv(path, dtype={"character": str}, encoding="utf-8", keep_default_na=False)
        except (OSError, ValueError) as e:
            raise FrequencyTableError(f"Failed to read frequency table {path}: {e}") from e

        missing = {"character", "rank"} - set(df.columns)
        if missing:
            raise FrequencyTableError(f"Frequency table {path} is missing columns: {sorted(missing)}")

        try:
            ranks = pd.to_numeric(df["rank"], errors="raise").astype(int)
        except (ValueError, TypeError) as e:
            raise FrequencyTableError(f"Frequency table {path} has non-numeric ranks: {e}") from e

        characters = df["character"].astype(str).str.strip()
        return cls.from_pairs(zip(characters, ranks))

    def rank(self, character: str) -> Optional[int]:
        """Get the rank of a character, or None if it is not in the table."""
        return self._ranks.get(character)

    def entries(self) -> List[FrequencyEntry]:
        """Get all entries ordered by rank."""
        return list(self._entries)

    def __contains__(self, character: object) -> bool:
        return character in self._ranks

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[FrequencyEntry]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"FrequencyTable({len(self)} entries)"


def load_frequency_table(path: Optional[Union[str, Path]] = None) -> FrequencyTable:
    """
    Load the frequency table, degrading to an empty table on failure.

    With an empty table every character is classified as maximally rare.

    Args:
        path: CSV file to load; defaults to the packaged table

    Returns:
        Loaded table, or an empty table if loading failed
    """
    table_path = Path(path) if path else DEFAULT_TABLE_PATH
    try:
        table = FrequencyTable.from_csv(table_path)
    except FrequencyTableError as e:
        logger.error(f"Could not load frequency table, every character will rank as unknown: {e}")
        return FrequencyTable()

    logger.debug(f"Loaded {len(table)} character ranks from {table_path}")
    return table
