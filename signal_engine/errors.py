"""
Error taxonomy for the signal engine.

Only ReentrancyConflictError and unexpected pipeline faults reach callers
of ScanPipeline; the other conditions are logged, counted and degraded.
An indicator without enough history is not an error: it yields None.
"""


class SignalEngineError(Exception):
    """Base class for signal engine errors."""


class ProviderUnavailableError(SignalEngineError):
    """The market-data provider could not serve a request."""


class PersistenceError(SignalEngineError):
    """A signal could not be written to the store."""


class ReentrancyConflictError(SignalEngineError):
    """A generation run is already in progress on this pipeline instance."""
