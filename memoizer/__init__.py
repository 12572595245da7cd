from .errors import MemoizerError, KeyDerivationError, ConfigurationError
from .key_deriver import KeyStrategy, KeyDeriver
from .memoizer import ArityPolicy, CacheInfo, Memoizer, memoize
