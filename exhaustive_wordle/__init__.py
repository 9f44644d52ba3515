"""
Exhaustive Wordle Solver
========================

Finds the guess minimizing the total number of guesses needed across every
secret still consistent with the feedback seen so far, by exhaustive search.
"""

__version__ = "1.0.0"

from .errors import SolverError, MalformedWord, InvalidConstraintState
from .facts import (
    ABSENT, PRESENT, EXACT, Fact, check, factify, facts_from_feedback,
)
from .filtering import filter_words
from .solver import (
    ExhaustiveSolver, GuessResult, solve, rank_guesses, sort_results,
)
from .words import WORD_LENGTH, ALPHABET, load_words
