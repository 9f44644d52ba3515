"""Exceptions raised by the solver."""


class SolverError(Exception):
    """Base class for all solver errors."""


class MalformedWord(SolverError, ValueError):
    """A word (or dictionary line) is not exactly WORD_LENGTH letters a-z."""


class InvalidConstraintState(SolverError, RuntimeError):
    """
    A set of facts rules out every word.

    Facts taken from real play always leave at least the secret itself, so
    this means the facts were built by hand or merged incorrectly.
    """

    def __init__(self, message: str, facts=None):
        super().__init__(message)
        self.facts = facts
