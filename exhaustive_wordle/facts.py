"""
Facts and Feedback
==================

A fact is one piece of feedback about one letter of a guess:

- EXACT:   the letter is in the secret at this position (green)
- PRESENT: the letter is in the secret, but not at this position (yellow)
- ABSENT:  the letter is not in the secret at all (gray)

Note on repeated letters: ``check`` marks every non-exact occurrence of a
letter PRESENT as long as the secret contains that letter somewhere. Real
Wordle only marks as many occurrences as the secret has. The filter below
relies on this; an ABSENT fact for a letter the secret does contain would
rule the secret out.

Internally a fact set is an (n_facts, 3) int32 array of
(letter_code, position, kind) rows.
"""

from typing import Iterable, List, NamedTuple, Sequence, Tuple

import numpy as np
from numba import jit

from .words import ALPHABET, WORD_LENGTH, validate_word, words_to_chars


# ============================================================================
# CONSTANTS
# ============================================================================

ABSENT = 0
PRESENT = 1
EXACT = 2
KIND_NAMES = ('absent', 'present', 'exact')

PATTERN_CHARS = {'B': ABSENT, 'Y': PRESENT, 'G': EXACT}


class Fact(NamedTuple):
    letter: str
    position: int
    kind: int

    def __str__(self) -> str:
        return f"{self.letter}@{self.position}:{KIND_NAMES[self.kind]}"


# ============================================================================
# NUMBA-ACCELERATED FEEDBACK
# ============================================================================

@jit(nopython=True, cache=True)
def compute_facts(secret: np.ndarray, guess: np.ndarray) -> np.ndarray:
    """
    Compute the facts a guess receives against a secret.

    Args:
        secret: shape (length,) array of char codes
        guess: shape (length,) array of char codes

    Returns:
        shape (length, 3) array of (letter, position, kind)
    """
    length = guess.shape[0]
    facts = np.empty((length, 3), dtype=np.int32)

    for i in range(length):
        c = guess[i]
        facts[i, 0] = c
        facts[i, 1] = i
        if c == secret[i]:
            facts[i, 2] = EXACT
        else:
            kind = ABSENT
            for j in range(length):
                if secret[j] == c:
                    kind = PRESENT
                    break
            facts[i, 2] = kind

    return facts


def check(secret: str, guess: str) -> List[Fact]:
    """Facts for ``guess`` if ``secret`` were the answer."""
    chars = words_to_chars([validate_word(secret, len(guess)),
                            validate_word(guess, len(guess))])
    return facts_from_array(compute_facts(chars[0], chars[1]))


# ============================================================================
# CONVERSION
# ============================================================================

def empty_facts() -> np.ndarray:
    return np.empty((0, 3), dtype=np.int32)


def facts_to_array(facts: Iterable[Fact],
                   length: int = WORD_LENGTH) -> np.ndarray:
    """Encode facts for the numba kernels, validating each one."""
    rows = []
    for letter, position, kind in facts:
        if letter not in ALPHABET:
            raise ValueError(f"Invalid fact letter: {letter!r}")
        if not 0 <= position < length:
            raise ValueError(f"Fact position {position} out of range "
                             f"for {length}-letter words")
        if kind not in (ABSENT, PRESENT, EXACT):
            raise ValueError(f"Invalid fact kind: {kind!r}")
        rows.append((ord(letter) - ord('a'), position, kind))
    if not rows:
        return empty_facts()
    return np.array(rows, dtype=np.int32)


def facts_from_array(arr: np.ndarray) -> List[Fact]:
    return [Fact(ALPHABET[row[0]], int(row[1]), int(row[2])) for row in arr]


def format_facts(facts) -> str:
    """Human-readable rendering of a fact set (list of Facts or array)."""
    if isinstance(facts, np.ndarray):
        facts = facts_from_array(facts)
    if not facts:
        return "(no facts)"
    return ', '.join(str(Fact(*f)) for f in facts)


# ============================================================================
# BUILDING FACT SETS
# ============================================================================

def factify(correct: Sequence[Tuple[str, int]],
            used: Sequence[Tuple[str, int]],
            not_used: str) -> List[Fact]:
    """
    Build a fact set by hand.

    Args:
        correct: (letter, position) pairs known to be exact
        used: (letter, position) pairs known to be present elsewhere
        not_used: letters known to be absent (position is irrelevant, 0 used)
    """
    facts = [Fact(letter, position, EXACT) for letter, position in correct]
    facts += [Fact(letter, position, PRESENT) for letter, position in used]
    facts += [Fact(letter, 0, ABSENT) for letter in not_used]
    return facts


def facts_from_feedback(guess: str, pattern: str) -> List[Fact]:
    """
    Facts from a real guess and its feedback pattern.

    Pattern chars: B = gray (absent), Y = yellow (present), G = green (exact),
    e.g. facts_from_feedback('salet', 'BYBBG').

    A gray repeat of a letter that is yellow or green elsewhere in the same
    guess only tells us the letter is not at that position, so it becomes a
    PRESENT fact rather than ABSENT.
    """
    validate_word(guess, len(guess))
    pattern = pattern.upper()
    if len(pattern) != len(guess):
        raise ValueError(f"Pattern {pattern!r} does not match guess {guess!r}")
    for p in pattern:
        if p not in PATTERN_CHARS:
            raise ValueError(f"Invalid pattern char: {p}")

    seen = {letter for letter, p in zip(guess, pattern) if p != 'B'}
    facts = []
    for i, (letter, p) in enumerate(zip(guess, pattern)):
        kind = PATTERN_CHARS[p]
        if kind == ABSENT and letter in seen:
            kind = PRESENT
        facts.append(Fact(letter, i, kind))
    return facts
