"""
Word Model
==========

Words are plain lowercase strings of WORD_LENGTH letters. The solver kernels
work on them as rows of letter codes (0-25 for a-z).
"""

import logging
import os
from typing import Iterable, List

import numpy as np

from .errors import MalformedWord

log = logging.getLogger(__name__)


# ============================================================================
# CONSTANTS
# ============================================================================

WORD_LENGTH = 5
ALPHABET = tuple('abcdefghijklmnopqrstuvwxyz')
PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
DEFAULT_WORDLIST = os.path.join(PACKAGE_DIR, "data", "words.txt")


# ============================================================================
# VALIDATION / ENCODING
# ============================================================================

def validate_word(word: str, length: int = WORD_LENGTH) -> str:
    """Return the word unchanged, or raise MalformedWord."""
    if len(word) != length:
        raise MalformedWord(
            f"{word!r} has {len(word)} letters, expected {length}")
    for c in word:
        if c not in ALPHABET:
            raise MalformedWord(f"{word!r} contains invalid letter {c!r}")
    return word


def words_to_chars(words: Iterable[str]) -> np.ndarray:
    """Convert words to a (n_words, length) array of char codes."""
    words = list(words)
    length = len(words[0]) if words else WORD_LENGTH
    arr = np.zeros((len(words), length), dtype=np.int32)
    for i, w in enumerate(words):
        for j, c in enumerate(w):
            arr[i, j] = ord(c) - ord('a')
    return arr


# ============================================================================
# LOADING
# ============================================================================

def load_words(filepath: str, length: int = WORD_LENGTH) -> List[str]:
    """
    Load a newline-delimited word list.

    Blank lines are skipped. Any other line that is not a word of exactly
    ``length`` letters raises MalformedWord.
    """
    words = []
    with open(filepath, 'r', encoding='utf-8') as f:
        for lineno, line in enumerate(f, start=1):
            w = line.strip().lower()
            if not w:
                continue
            try:
                words.append(validate_word(w, length))
            except MalformedWord as e:
                raise MalformedWord(f"{filepath}, line {lineno}: {e}") from e
    log.debug(f"Read {len(words)} words from {filepath}")
    return words
