"""
Error taxonomy for K-means replay.

Engine errors are raised before any iteration is produced; history errors
are raised on malformed frame or order queries and are always recoverable.
"""


class KMeansReplayError(Exception):
    """Base class for all errors raised by this package."""


class InvalidConfiguration(KMeansReplayError, ValueError):
    """Bad run parameters: empty input, k out of range, bad cap or tolerance."""


class DegenerateInput(KMeansReplayError, ValueError):
    """Input has fewer distinct locations than requested seeds."""


class OutOfRange(KMeansReplayError, IndexError):
    """A frame index or iteration order with no recorded counterpart."""
