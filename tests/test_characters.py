"""Tests for ideograph classification."""

import pytest

from zh_reader.characters import extract_hanzi, is_hanzi


class TestIsHanzi:
    """Test the ideograph range check."""

    @pytest.mark.parametrize("char", ["一", "中", "鿿", "的"])
    def test_ideographs(self, char):
        assert is_hanzi(char)

    @pytest.mark.parametrize("char", ["a", "1", "。", "，", "🎉", " ", "ㄅ", "㐀", "\U00020000", ""])
    def test_non_ideographs(self, char):
        assert not is_hanzi(char)

    def test_multiple_characters(self):
        assert not is_hanzi("中文")


class TestExtractHanzi:
    """Test filtering text down to ideographs."""

    def test_keeps_order_and_duplicates(self):
        assert extract_hanzi("快快乐乐") == ["快", "快", "乐", "乐"]

    def test_mixed_content(self):
        assert extract_hanzi("我喜欢coding！🎉 Let's learn 中文 together。") == ["我", "喜", "欢", "中", "文"]

    def test_no_ideographs(self):
        assert extract_hanzi("Hello, 123 ！？") == []
