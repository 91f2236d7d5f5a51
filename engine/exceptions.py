"""
Error taxonomy shared by the detectors, the alert manager and the API layer.
"""


class EngineError(Exception):
    pass


class ConfigurationError(EngineError, ValueError):
    """Invalid caller-supplied parameter or input series."""


class PersistenceError(EngineError):
    """The alert store is unreachable or rejected a statement."""


class AlertNotFound(EngineError, LookupError):
    pass
