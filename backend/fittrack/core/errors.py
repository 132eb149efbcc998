"""Error taxonomy for tracking, derivation and persistence."""


class FitTrackError(Exception):
    """Base class for domain errors."""


class InvalidStateError(FitTrackError):
    """Illegal state-machine transition, or mutation of a sealed record."""


class InvalidOrderError(FitTrackError):
    """A route point was appended out of sequence."""


class InvalidRepsError(FitTrackError):
    """Rep count outside the domain of the one-rep-max formula."""


class AlreadyActiveError(FitTrackError):
    """A tracking session is already running."""


class PersistenceError(FitTrackError):
    """The store rejected a write. The in-memory state is untouched, so retry or discard."""
