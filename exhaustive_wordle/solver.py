"""
Exhaustive Wordle Solver
========================

Finds the guess that minimizes the TOTAL number of guesses needed across all
secrets still consistent with the facts seen so far.

Algorithm:
- C = words consistent with the facts
- |C| = 1: guess it, total 1
- otherwise, for every candidate guess g:
      cost(g) = 1 + Σ_{w ∈ C} solve(C, facts + check(w, g))
  where each w is a hypothetical secret, and the cheapest g wins
  (earliest in word order on ties)

The search is exact and unpruned, so its cost grows super-exponentially with
|C|. Use word lists of a few dozen words, not a full dictionary.
"""

import logging
import multiprocessing
import time
from typing import Dict, Iterable, List, NamedTuple, Sequence, Tuple

import numpy as np
from tqdm import tqdm

from .errors import InvalidConstraintState
from .facts import (
    Fact, compute_facts, facts_from_array, facts_to_array, format_facts,
)
from .filtering import filter_indices
from .words import validate_word, words_to_chars

log = logging.getLogger(__name__)

STATUS_INTERVAL = 2.0  # seconds


class GuessResult(NamedTuple):
    guess: str
    guesses: int
    num_candidates: int

    def __str__(self) -> str:
        return (f"Word: {self.guess!r} Guesses: {self.guesses} "
                f"Num: {self.num_candidates}")


# ============================================================================
# SOLVER CLASS
# ============================================================================

class ExhaustiveSolver:
    """
    Exact minimum-total-guesses search over a (small) word list.
    """

    def __init__(self, words: Sequence[str], workers: int = 1,
                 memoize: bool = False, verbose: bool = False):
        """
        Initialize solver.

        Args:
            words: Possible secrets; also the guesses the search may choose
            workers: Processes used for the top-level guesses (1 = no pool)
            memoize: Cache results per candidate set
            verbose: Log search progress every few seconds (DEBUG level)
        """
        words = [w.lower() for w in words]
        if not words:
            raise ValueError("No words given")
        self.word_length = len(words[0])
        for w in words:
            validate_word(w, self.word_length)

        # Identical words can never be told apart.
        unique = list(dict.fromkeys(words))
        if len(unique) < len(words):
            log.warning(f"Dropped {len(words) - len(unique)} duplicate words")

        self.words = unique
        self.n_words = len(unique)
        self.word_chars = words_to_chars(unique)
        self.all_indices = np.arange(self.n_words)

        self.workers = max(1, workers)
        self.memoize = memoize
        self.verbose = verbose

        # Memoization cache: candidate indices -> (best_guess_idx, total)
        self.cache: Dict[Tuple[int, ...], Tuple[int, int]] = {}
        self.cache_hits = 0
        self.cache_misses = 0

        self.calls = 0
        self.last_status_time = time.time()

    def _as_array(self, facts) -> np.ndarray:
        if isinstance(facts, np.ndarray):
            return facts
        return facts_to_array(facts, self.word_length)

    def candidates(self, facts: Iterable[Fact] = ()) -> List[str]:
        """Words consistent with the facts."""
        idx = filter_indices(self.word_chars, self.all_indices,
                             self._as_array(facts))
        return [self.words[i] for i in idx]

    # ------------------------------------------------------------------------
    # Single query
    # ------------------------------------------------------------------------

    def best_guess(self, facts: Iterable[Fact] = ()) -> GuessResult:
        """
        Best next guess given the facts so far.

        Raises:
            InvalidConstraintState: no word satisfies the facts
        """
        facts = self._as_array(facts)
        self.calls = 0
        self.last_status_time = time.time()

        guess_idx, total, n = self._search(self.all_indices, facts, 0)

        log.debug(f"best_guess: {n} candidates, {self.calls} searches, "
                  f"cache={len(self.cache)} "
                  f"({self.cache_hits} hits, {self.cache_misses} misses)")
        return GuessResult(self.words[guess_idx], total, n)

    def _search(self, universe: np.ndarray, facts: np.ndarray,
                depth: int) -> Tuple[int, int, int]:
        """
        Recursive exhaustive search.

        Args:
            universe: Word indices to filter (already filtered by the caller)
            facts: Fact array accumulated so far
            depth: Recursion depth (0 = top level)

        Returns:
            (best_guess_idx, total_guesses, n_candidates)
        """
        self.calls += 1
        candidates = filter_indices(self.word_chars, universe, facts)
        n = len(candidates)

        if self.verbose and time.time() - self.last_status_time > STATUS_INTERVAL:
            log.debug(f"[search] calls={self.calls}, depth={depth}, n={n}, "
                      f"cache={len(self.cache)}")
            self.last_status_time = time.time()

        if n == 1:
            return int(candidates[0]), 1, 1

        if n == 0:
            raise InvalidConstraintState(
                f"No words satisfy the facts: {format_facts(facts)}",
                facts_from_array(facts))

        if self.memoize:
            key = tuple(candidates.tolist())
            if key in self.cache:
                self.cache_hits += 1
                guess_idx, total = self.cache[key]
                return guess_idx, total, n
            self.cache_misses += 1

        if depth == 0 and self.workers > 1:
            costs = self._parallel_costs(candidates, facts)
        else:
            costs = [self._guess_cost(self.word_chars[g], candidates, facts,
                                      depth)
                     for g in candidates]

        # Strictly-smaller comparison in list order: ties keep the earliest.
        best = 0
        for i in range(1, n):
            if costs[i] < costs[best]:
                best = i

        guess_idx, total = int(candidates[best]), costs[best]
        if self.memoize:
            self.cache[key] = (guess_idx, total)
        return guess_idx, total, n

    def _guess_cost(self, guess_chars: np.ndarray, candidates: np.ndarray,
                    facts: np.ndarray, depth: int = 0) -> int:
        """Total guesses if ``guess_chars`` is played against every candidate."""
        total = 1
        for w in candidates:
            new_facts = np.concatenate(
                (compute_facts(self.word_chars[w], guess_chars), facts))
            _, guesses, _ = self._search(candidates, new_facts, depth + 1)
            total += guesses
        return total

    def _pool(self):
        return multiprocessing.Pool(self.workers, initializer=_init_worker,
                                    initargs=(self.words, self.memoize))

    def _parallel_costs(self, candidates: np.ndarray,
                        facts: np.ndarray) -> List[int]:
        tasks = [(self.word_chars[g], candidates, facts) for g in candidates]
        log.debug(f"Dispatching {len(tasks)} guesses to {self.workers} workers")
        with self._pool() as pool:
            # map() returns results in task order, whatever order they finish
            return pool.map(_guess_cost_worker, tasks)

    # ------------------------------------------------------------------------
    # Ranking
    # ------------------------------------------------------------------------

    def rank(self, guesses: Sequence[str], facts: Iterable[Fact] = (),
             progress: bool = False) -> List[GuessResult]:
        """
        Total guesses needed for each opening guess, in input order.

        The opening guess is fixed; every later guess is chosen by the
        exhaustive search.
        """
        guesses = [validate_word(g.lower(), self.word_length) for g in guesses]
        facts = self._as_array(facts)
        candidates = filter_indices(self.word_chars, self.all_indices, facts)
        if len(candidates) == 0:
            raise InvalidConstraintState(
                f"No words satisfy the facts: {format_facts(facts)}",
                facts_from_array(facts))

        tasks = [(row, candidates, facts) for row in words_to_chars(guesses)]
        if self.workers > 1 and tasks:
            with self._pool() as pool:
                costs = list(tqdm(pool.imap(_guess_cost_worker, tasks),
                                  total=len(tasks), disable=not progress))
        else:
            costs = [self._guess_cost(*task)
                     for task in tqdm(tasks, disable=not progress)]

        return [GuessResult(g, cost, len(guesses))
                for g, cost in zip(guesses, costs)]


# ============================================================================
# WORKER PROCESSES
# ============================================================================

_worker_solver = None


def _init_worker(words: List[str], memoize: bool) -> None:
    global _worker_solver
    _worker_solver = ExhaustiveSolver(words, workers=1, memoize=memoize)


def _guess_cost_worker(args) -> int:
    guess_chars, candidates, facts = args
    return _worker_solver._guess_cost(guess_chars, candidates, facts)


# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================

def solve(words: Sequence[str], facts: Iterable[Fact] = (),
          workers: int = 1, memoize: bool = False) -> GuessResult:
    """Best guess for ``words`` given ``facts``."""
    return ExhaustiveSolver(words, workers=workers,
                            memoize=memoize).best_guess(facts)


def rank_guesses(words: Sequence[str], guesses: Sequence[str],
                 facts: Iterable[Fact] = (), workers: int = 1,
                 memoize: bool = False,
                 progress: bool = False) -> List[GuessResult]:
    """Total guesses for each of ``guesses`` as the opening guess."""
    solver = ExhaustiveSolver(words, workers=workers, memoize=memoize)
    return solver.rank(guesses, facts, progress=progress)


def sort_results(results: Iterable[GuessResult]) -> List[GuessResult]:
    """Fewest total guesses first; ties keep their input order."""
    return sorted(results, key=lambda r: r.guesses)
