"""Exception hierarchy for the stochastic core.

Only caller contract violations and opt-in retry caps raise; draws from a
valid generator state always succeed.
"""

from __future__ import annotations

__all__ = ["EvocoreError", "InvalidRangeError", "RejectionLimitExceeded"]


class EvocoreError(Exception):
    """Base class for all errors raised by this library."""


class InvalidRangeError(EvocoreError, ValueError):
    """Raised when a range has its lower end above its upper end.

    Attributes:
        lower: The offending lower end.
        upper: The offending upper end.
    """

    def __init__(self, lower: object, upper: object, what: str = "range") -> None:
        self.lower = lower
        self.upper = upper
        super().__init__(f"Invalid {what}: lower end {lower!r} is greater than upper end {upper!r}")


class RejectionLimitExceeded(EvocoreError, RuntimeError):
    """Raised when a capped rejection-sampling loop runs out of attempts.

    Attributes:
        attempts: Number of rejected draws when the loop gave up.
        accepted: Number of values accepted before giving up.
    """

    def __init__(self, attempts: int, accepted: int, what: str = "candidate") -> None:
        self.attempts = attempts
        self.accepted = accepted
        super().__init__(
            f"Gave up after {attempts} rejected {what} draws ({accepted} accepted); "
            "the constraints or sampling ratio may be unsatisfiable"
        )
