from .config import MemoizerConfig, SCHEMA_VERSION
from .error_counter import ErrorCounter
