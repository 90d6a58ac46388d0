"""Exception hierarchy for write-bench."""


class WriteBenchError(Exception):
    """Base exception for all write-bench errors."""


class InvariantViolationError(WriteBenchError):
    """A measurement invariant does not hold.

    Raised for failed status queries, undersized block sizes, failed mappings,
    output/input size mismatches and malformed sample sets. There is no
    recovery path: numbers measured past this point would be meaningless.
    """


class UsageError(WriteBenchError):
    """The process was started with unsuitable standard descriptors."""
