class MarkovError(Exception):
    """Base class for errors raised by the transition-model engine."""


class ConfigurationError(MarkovError, ValueError):
    """Invalid state size, output size or seed phrase."""


class CorruptDataError(MarkovError, ValueError):
    """A saved model buffer could not be decoded."""


class EmptyModelWarning(UserWarning):
    """The corpus was too short to learn any transition for the state size."""
