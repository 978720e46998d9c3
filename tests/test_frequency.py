"""Tests for the frequency rank table."""

import logging

import pytest

from zh_reader.frequency import (
    DEFAULT_TABLE_PATH,
    FrequencyEntry,
    FrequencyTable,
    FrequencyTableError,
    load_frequency_table,
)


class TestFrequencyTable:
    """Test building and querying tables."""

    def test_from_characters_ranks_in_order(self):
        table = FrequencyTable.from_characters("的一是")

        assert table.rank("的") == 1
        assert table.rank("一") == 2
        assert table.rank("是") == 3
        assert len(table) == 3

    def test_unknown_character(self):
        table = FrequencyTable.from_characters("的一")
        assert table.rank("鎏") is None
        assert "鎏" not in table
        assert "的" in table

    def test_from_pairs_accepts_any_order(self):
        table = FrequencyTable.from_pairs([("是", 3), ("的", 1), ("一", 2)])
        assert [entry.character for entry in table] == ["的", "一", "是"]

    def test_entries(self):
        table = FrequencyTable.from_characters("的一")
        assert table.entries() == [FrequencyEntry(1, "的"), FrequencyEntry(2, "一")]

    def test_empty_table(self):
        table = FrequencyTable()
        assert len(table) == 0
        assert table.rank("的") is None

    def test_gap_in_ranks(self):
        with pytest.raises(FrequencyTableError, match="dense"):
            FrequencyTable.from_pairs([("的", 1), ("一", 3)])

    def test_ranks_must_start_at_one(self):
        with pytest.raises(FrequencyTableError):
            FrequencyTable.from_pairs([("的", 2)])

    def test_duplicate_rank(self):
        with pytest.raises(FrequencyTableError):
            FrequencyTable.from_pairs([("的", 1), ("一", 1)])

    def test_duplicate_character(self):
        with pytest.raises(FrequencyTableError, match="ranked twice"):
            FrequencyTable.from_pairs([("的", 1), ("的", 2)])

    def test_multi_character_entry(self):
        with pytest.raises(FrequencyTableError, match="single character"):
            FrequencyTable.from_pairs([("中国", 1)])


class TestFromCsv:
    """Test loading tables from CSV files."""

    def test_loads_csv(self, tmp_path):
        path = tmp_path / "ranks.csv"
        path.write_text("character,rank\n的,1\n一,2\n是,3\n", encoding="utf-8")

        table = FrequencyTable.from_csv(path)

        assert len(table) == 3
        assert table.rank("是") == 3

    def test_extra_columns_are_ignored(self, tmp_path):
        path = tmp_path / "ranks.csv"
        path.write_text("rank,character,count\n1,的,100\n2,一,50\n", encoding="utf-8")

        assert FrequencyTable.from_csv(path).rank("一") == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(FrequencyTableError, match="Failed to read"):
            FrequencyTable.from_csv(tmp_path / "missing.csv")

    def test_missing_column(self, tmp_path):
        path = tmp_path / "ranks.csv"
        path.write_text("character,count\n的,100\n", encoding="utf-8")

        with pytest.raises(FrequencyTableError, match="missing columns"):
            FrequencyTable.from_csv(path)

    def test_non_numeric_rank(self, tmp_path):
        path = tmp_path / "ranks.csv"
        path.write_text("character,rank\n的,first\n", encoding="utf-8")

        with pytest.raises(FrequencyTableError, match="non-numeric"):
            FrequencyTable.from_csv(path)


class TestLoadFrequencyTable:
    """Test the degrading loader."""

    def test_packaged_table(self):
        table = load_frequency_table()

        assert DEFAULT_TABLE_PATH.exists()
        assert len(table) > 2500
        assert table.rank("的") == 1
        assert table.rank("我") < 500

    def test_failure_degrades_to_empty_table(self, tmp_path, caplog):
        with caplog.at_level(logging.ERROR, logger="zh_reader.frequency"):
            table = load_frequency_table(tmp_path / "missing.csv")

        assert len(table) == 0
        assert "Could not load frequency table" in caplog.text

    def test_inconsistent_table_degrades(self, tmp_path):
        path = tmp_path / "ranks.csv"
        path.write_text("character,rank\n的,1\n一,5\n", encoding="utf-8")

        assert len(load_frequency_table(path)) == 0
