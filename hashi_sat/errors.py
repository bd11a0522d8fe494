class HashiError(Exception):
    """Base class for everything the solver raises."""


class InvalidBoardError(HashiError, ValueError):
    """The grid is not rectangular or holds a value other than empty/1-8."""


class Unsatisfiable(HashiError):
    """The board has no solution."""


class LocalUnsatisfiable(Unsatisfiable):
    """
    An island can never reach its value: it has no candidate bridges, or no
    distribution of 0/1/2 over its bridges sums to its value.
    Detected before the SAT solver runs.
    """


class GlobalUnsatisfiable(Unsatisfiable):
    """The SAT solver found no (connected) assignment."""
