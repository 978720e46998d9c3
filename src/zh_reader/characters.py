"""Character classification helpers shared by the segmenter and the analyzer."""

import re
from typing import List

# CJK Unified Ideographs block
CJK_START = 0x4E00
CJK_END = 0x9FFF

HANZI_RE = re.compile(r"[\u4e00-\u9fff]")

SENTENCE_DELIMITERS = "。！？；"


def is_hanzi(char: str) -> bool:
    """Check if ``char`` is a single ideograph in U+4E00..U+9FFF."""
    return len(char) == 1 and CJK_START <= ord(char) <= CJK_END


def extract_hanzi(text: str) -> List[str]:
    """
    Filter text down to its qualifying ideographs.

    Duplicates are kept and encounter order is preserved.

    Args:
        text: Raw text, possibly mixed with Latin letters, digits, emoji or punctuation

    Returns:
        List of single-character strings
    """
    return HANZI_RE.findall(text)
