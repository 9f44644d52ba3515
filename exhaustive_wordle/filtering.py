"""Candidate filtering: keep the words consistent with every fact."""

from typing import Iterable, List

import numpy as np
from numba import jit

from .facts import EXACT, PRESENT, Fact, facts_to_array
from .words import validate_word, words_to_chars


@jit(nopython=True, cache=True)
def consistent_mask(word_chars: np.ndarray, facts: np.ndarray) -> np.ndarray:
    """
    Boolean mask of the words satisfying all facts.

    Args:
        word_chars: shape (n_words, length) array of char codes
        facts: shape (n_facts, 3) array of (letter, position, kind)
    """
    n_words = word_chars.shape[0]
    length = word_chars.shape[1]
    mask = np.ones(n_words, dtype=np.bool_)

    for i in range(n_words):
        for f in range(facts.shape[0]):
            letter = facts[f, 0]
            position = facts[f, 1]
            kind = facts[f, 2]

            contains = False
            for j in range(length):
                if word_chars[i, j] == letter:
                    contains = True
                    break

            if kind == EXACT:
                ok = word_chars[i, position] == letter
            elif kind == PRESENT:
                ok = word_chars[i, position] != letter and contains
            else:
                ok = not contains

            if not ok:
                mask[i] = False
                break

    return mask


def filter_indices(word_chars: np.ndarray, universe: np.ndarray,
                   facts: np.ndarray) -> np.ndarray:
    """Subset of the ``universe`` word indices consistent with ``facts``."""
    return universe[consistent_mask(word_chars[universe], facts)]


def filter_words(words: List[str], facts: Iterable[Fact]) -> List[str]:
    """Words consistent with every fact, in their original order."""
    if not words:
        return []
    length = len(words[0])
    for w in words:
        validate_word(w, length)
    mask = consistent_mask(words_to_chars(words), facts_to_array(facts, length))
    return [w for w, keep in zip(words, mask) if keep]
