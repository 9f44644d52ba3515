"""
Command-line driver.

    exhaustive-wordle demo --limit 40
    exhaustive-wordle best --exact l1 --present l3 --absent chaps
    exhaustive-wordle best --feedback salet:BYBBG
    exhaustive-wordle rank --limit 12 --guesses crane,slate
"""

import argparse
from contextlib import contextmanager
import logging
import sys
from timeit import default_timer as timer
from typing import Generator, List, Optional, Sequence

from cardinal_pythonlib.logs import main_only_quicksetup_rootlogger

from .errors import SolverError
from .facts import Fact, factify, facts_from_feedback, format_facts
from .solver import ExhaustiveSolver, sort_results
from .words import DEFAULT_WORDLIST, load_words

log = logging.getLogger(__name__)

# Example constraints: 'l' second, 'l' also somewhere but not first or
# fourth, and none of c/h/a/p/s.
DEMO_CORRECT = [('l', 1)]
DEMO_USED = [('l', 3), ('l', 0)]
DEMO_NOT_USED = "chaps"


@contextmanager
def time_section(name: str,
                 loglevel: int = logging.DEBUG) -> Generator[None, None, None]:
    start = timer()
    try:
        yield
    finally:
        log.log(loglevel, f"{name} took {timer() - start:.2f} s")


def parse_letter_position(text: str) -> tuple:
    """'l1' -> ('l', 1)"""
    if len(text) < 2 or not text[1:].isdigit():
        raise argparse.ArgumentTypeError(
            f"Expected LETTER followed by POSITION, e.g. l1, not {text!r}")
    return text[0].lower(), int(text[1:])


def parse_feedback(text: str) -> List[Fact]:
    """'salet:BYBBG' -> facts"""
    guess, sep, pattern = text.partition(':')
    if not sep:
        raise argparse.ArgumentTypeError(
            f"Expected GUESS:PATTERN, e.g. salet:BYBBG, not {text!r}")
    try:
        return facts_from_feedback(guess.lower(), pattern)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_facts(args: argparse.Namespace) -> List[Fact]:
    facts = factify(args.exact, args.present, ''.join(args.absent).lower())
    for fb in args.feedback:
        facts += fb
    return facts


def load_solver(args: argparse.Namespace) -> ExhaustiveSolver:
    with time_section("Loading words"):
        words = load_words(args.words)
    log.info(f"Read {len(words)} words from {args.words}")
    if args.limit is not None:
        words = words[:args.limit]
        log.info(f"Using the first {len(words)} words")
    return ExhaustiveSolver(words, workers=args.workers,
                            memoize=args.memoize, verbose=args.verbose)


def report_best(solver: ExhaustiveSolver, facts: List[Fact]) -> None:
    log.info(f"Facts: {format_facts(facts)}")
    start = timer()
    result = solver.best_guess(facts)
    elapsed = timer() - start
    print(f"Best guess: {result.guess}")
    print(f"Total guesses: {result.guesses} "
          f"(across {result.num_candidates} candidates)")
    print(f"Elapsed: {elapsed:.2f}s")


def cmd_demo(args: argparse.Namespace) -> None:
    solver = load_solver(args)
    report_best(solver, factify(DEMO_CORRECT, DEMO_USED, DEMO_NOT_USED))


def cmd_best(args: argparse.Namespace) -> None:
    solver = load_solver(args)
    report_best(solver, build_facts(args))


def cmd_rank(args: argparse.Namespace) -> None:
    solver = load_solver(args)
    guesses = args.guesses.split(',') if args.guesses else solver.words
    start = timer()
    results = sort_results(solver.rank(guesses, build_facts(args),
                                       progress=args.progress))
    elapsed = timer() - start
    for r in results:
        print(f"  {r.guess}: {r.guesses}")
    print(f"Elapsed: {elapsed:.2f}s")


def add_fact_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--exact", type=parse_letter_position, action="append", default=[],
        metavar="LETTERPOS",
        help="Letter known to be at a (0-based) position, e.g. l1"
    )
    parser.add_argument(
        "--present", type=parse_letter_position, action="append", default=[],
        metavar="LETTERPOS",
        help="Letter in the word but not at this position, e.g. l3"
    )
    parser.add_argument(
        "--absent", action="append", default=[], metavar="LETTERS",
        help="Letters not in the word, e.g. chaps"
    )
    parser.add_argument(
        "--feedback", type=parse_feedback, action="append", default=[],
        metavar="GUESS:PATTERN",
        help="A real guess and its feedback (B=gray, Y=yellow, G=green), "
             "e.g. salet:BYBBG"
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    # -------------------------------------------------------------------------
    # Arguments
    # -------------------------------------------------------------------------
    parser = argparse.ArgumentParser(
        "exhaustive-wordle",
        description="Exhaustive Wordle solver.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "--words", default=DEFAULT_WORDLIST,
        help="File of words, one per line"
    )
    parser.add_argument(
        "--limit", type=int,
        help="Only use the first N words (the search is exponential)"
    )
    parser.add_argument(
        "--workers", type=int, default=1,
        help="Number of parallel processes"
    )
    parser.add_argument(
        "--memoize", action="store_true",
        help="Cache results per candidate set"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Be verbose"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    parser_demo = subparsers.add_parser(
        "demo", help="Solve an example set of constraints",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser_demo.set_defaults(func=cmd_demo)

    parser_best = subparsers.add_parser(
        "best", help="Best next guess for the given facts",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    add_fact_arguments(parser_best)
    parser_best.set_defaults(func=cmd_best)

    parser_rank = subparsers.add_parser(
        "rank", help="Total guesses needed for each opening guess",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser_rank.add_argument(
        "--guesses",
        help="Comma-separated opening guesses (default: every word)"
    )
    parser_rank.add_argument(
        "--progress", action="store_true",
        help="Show a progress bar"
    )
    add_fact_arguments(parser_rank)
    parser_rank.set_defaults(func=cmd_rank)

    args = parser.parse_args(argv)

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    loglevel = logging.DEBUG if args.verbose else logging.INFO
    main_only_quicksetup_rootlogger(level=loglevel)

    # -------------------------------------------------------------------------
    # Act
    # -------------------------------------------------------------------------
    try:
        args.func(args)
    except (SolverError, ValueError, OSError) as e:
        log.critical(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
