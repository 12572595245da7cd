class MemoizerError(Exception):
    """base class of the errors raised by the memoizer itself"""


# arguments cannot be converted to a cache key
class KeyDerivationError(MemoizerError):
    pass


# the chosen key strategy does not accept the given arguments
class ConfigurationError(MemoizerError):
    pass
