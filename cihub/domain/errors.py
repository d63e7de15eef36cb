class EstimationError(RuntimeError):
    """Base class for failures of a single estimate exchange."""


class TransportError(EstimationError):
    """The HTTP exchange itself did not complete."""


class ResponseParseError(EstimationError):
    """A body arrived but could not be read as an estimator response."""


class PersistenceError(RuntimeError):
    """The durable key-value store could not be read or written."""
