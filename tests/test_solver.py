import unittest
from unittest import mock

from exhaustive_wordle import solver as solver_module
from exhaustive_wordle.errors import (
    InvalidConstraintState, MalformedWord, SolverError,
)
from exhaustive_wordle.facts import ABSENT, EXACT, Fact, factify
from exhaustive_wordle.solver import (
    ExhaustiveSolver, GuessResult, rank_guesses, solve, sort_results,
)

DEMO_WORDS = ["blond", "blown", "elder", "flood", "glory", "olive"]


class TestBestGuess(unittest.TestCase):
    def test_singleton(self) -> None:
        words = ["apple", "angle", "adobe"]
        result = solve(words, [Fact('p', 1, EXACT)])
        assert result == GuessResult("apple", 1, 1)

    def test_two_candidates(self) -> None:
        # One guess for the chosen word, one more for each secret.
        assert solve(["angle", "adobe"]) == GuessResult("angle", 3, 2)

    def test_concrete_scenario(self) -> None:
        words = ["apple", "angle", "adobe"]
        facts = [Fact('a', 0, EXACT), Fact('p', 1, ABSENT)]
        first = solve(words, facts)
        assert first.guesses <= 3
        assert first == GuessResult("angle", 3, 2)
        for _ in range(3):
            assert solve(words, facts) == first

    def test_three_candidates(self) -> None:
        # apple and angle each split the other two apart (1 + 3); adobe
        # cannot tell apple from angle (1 + 3 + 3 + 1).
        assert solve(["apple", "angle", "adobe"]) == \
            GuessResult("apple", 4, 3)

    def test_ties_go_to_first_word(self) -> None:
        assert solve(["adobe", "angle"]).guess == "adobe"
        assert solve(["angle", "adobe"]).guess == "angle"

    def test_contradiction(self) -> None:
        words = ["apple", "angle", "adobe"]
        facts = [Fact('z', 0, EXACT)]
        with self.assertRaises(InvalidConstraintState) as cm:
            solve(words, facts)
        assert cm.exception.facts == facts
        assert "z@0:exact" in str(cm.exception)
        assert isinstance(cm.exception, SolverError)

    def test_result_is_a_candidate(self) -> None:
        result = solve(DEMO_WORDS + ["crane", "slate"],
                       factify([('l', 1)], [('l', 3), ('l', 0)], "chaps"))
        assert result.guess in DEMO_WORDS
        assert result.num_candidates == 6
        # At least one guess per secret, plus the guess itself.
        assert result.guesses >= 1 + 6


class TestSolverOptions(unittest.TestCase):
    def test_memoized_matches_plain(self) -> None:
        plain = ExhaustiveSolver(DEMO_WORDS)
        memo = ExhaustiveSolver(DEMO_WORDS, memoize=True)
        assert memo.best_guess() == plain.best_guess()
        assert len(memo.cache) > 0
        assert memo.cache_misses == len(memo.cache)

    def test_parallel_matches_sequential(self) -> None:
        sequential = ExhaustiveSolver(DEMO_WORDS).best_guess()
        parallel = ExhaustiveSolver(DEMO_WORDS, workers=2).best_guess()
        assert parallel == sequential

    def test_search_depth_tracks_recursion(self) -> None:
        # adobe leaves {apple, angle} for secret apple, which needs a
        # second level below it.
        solver = ExhaustiveSolver(["apple", "angle", "adobe"])
        with mock.patch.object(solver, "_search",
                               wraps=solver._search) as search:
            solver.best_guess()
        depths = [c.args[2] for c in search.call_args_list]
        assert depths[0] == 0
        assert max(depths) == 2

    def test_verbose_status_reports_depth(self) -> None:
        solver = ExhaustiveSolver(["apple", "angle", "adobe"], verbose=True)
        with mock.patch.object(solver_module, "STATUS_INTERVAL", -1.0):
            with self.assertLogs("exhaustive_wordle.solver",
                                 level="DEBUG") as cm:
                result = solver.best_guess()
        assert result == GuessResult("apple", 4, 3)
        status = [m for m in cm.output if "[search]" in m]
        assert any("depth=1" in m for m in status)
        assert any("depth=2" in m for m in status)

    def test_duplicates_dropped(self) -> None:
        solver = ExhaustiveSolver(["angle", "Angle", "adobe"])
        assert solver.words == ["angle", "adobe"]
        assert solver.best_guess() == GuessResult("angle", 3, 2)

    def test_invalid_words(self) -> None:
        with self.assertRaises(ValueError):
            ExhaustiveSolver([])
        with self.assertRaises(MalformedWord):
            ExhaustiveSolver(["angle", "adobes"])

    def test_candidates(self) -> None:
        solver = ExhaustiveSolver(["apple", "angle", "adobe"])
        assert solver.candidates([Fact('p', 1, ABSENT)]) == ["angle", "adobe"]
        assert solver.candidates() == ["apple", "angle", "adobe"]


class TestRank(unittest.TestCase):
    def test_rank(self) -> None:
        results = rank_guesses(["angle", "adobe"], ["adobe", "angle"])
        assert results == [GuessResult("adobe", 3, 2),
                           GuessResult("angle", 3, 2)]

    def test_rank_matches_best_guess(self) -> None:
        words = ["apple", "angle", "adobe"]
        results = rank_guesses(words, words)
        assert [r.guesses for r in results] == [4, 4, 8]
        best = sort_results(results)[0]
        assert (best.guess, best.guesses) == (solve(words).guess,
                                              solve(words).guesses)

    def test_guess_outside_dictionary(self) -> None:
        # 'zzzzz' tells us nothing, so each secret still costs a full solve.
        results = rank_guesses(["angle", "adobe"], ["zzzzz"])
        assert results == [GuessResult("zzzzz", 1 + 3 + 3, 1)]

    def test_rank_with_facts(self) -> None:
        solver = ExhaustiveSolver(["apple", "angle", "adobe"])
        results = solver.rank(["angle"], [Fact('p', 1, ABSENT)])
        assert results == [GuessResult("angle", 3, 1)]

    def test_rank_contradiction(self) -> None:
        solver = ExhaustiveSolver(["apple", "angle", "adobe"])
        with self.assertRaises(InvalidConstraintState):
            solver.rank(["angle"], [Fact('z', 0, EXACT)])

    def test_parallel_rank(self) -> None:
        guesses = ["blond", "crane", "olive"]
        sequential = ExhaustiveSolver(DEMO_WORDS).rank(guesses)
        parallel = ExhaustiveSolver(DEMO_WORDS, workers=2).rank(guesses)
        assert parallel == sequential
        assert [r.guess for r in parallel] == guesses

    def test_sort_results(self) -> None:
        results = [GuessResult("b", 5, 3), GuessResult("a", 4, 3),
                   GuessResult("c", 5, 3)]
        assert [r.guess for r in sort_results(results)] == ["a", "b", "c"]
        assert str(results[1]) == "Word: 'a' Guesses: 4 Num: 3"
