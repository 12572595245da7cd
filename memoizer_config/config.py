from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional, Type

from memoizer import ArityPolicy, KeyStrategy, Memoizer
from memoizer_config.error_counter import ErrorCounter
from memoizer_config.loader import load_file, load_string
from memoizer_config.writer import ConfigWriter

SCHEMA_VERSION = "1.0"
KNOWN_KEYS = ("schema-version", "strategy", "arity-policy", "thread-safe")


class MemoizerConfig:
    def __init__(self):
        self.strategy = KeyStrategy.STRUCTURAL
        self.arity_policy = ArityPolicy.FAIL
        self.thread_safe = False
        self.source_object: Any = None
        self.error_counter = ErrorCounter()

    # fill content and print message if necessary
    # 'data' should have line number information
    def fill_and_validate(self, data: Any):
        self.error_counter = ErrorCounter()
        self.source_object = data
        if data is None:
            self.error_counter.record("configuration is empty")
        elif not isinstance(data, dict):
            self.error_counter.record(
                "configuration must be a mapping, not %s" % type(data).__name__)
        else:
            self.check_keys(data)
            self.strategy = self.check_choice_field(
                data, "strategy", KeyStrategy, self.strategy)
            self.arity_policy = self.check_choice_field(
                data, "arity-policy", ArityPolicy, self.arity_policy)
            self.thread_safe = self.check_bool_field(
                data, "thread-safe", self.thread_safe)

        if self.error_counter.error_count > 0:
            self.error_counter.print_errors()

    def check_keys(self, data: dict):
        version = data.get("schema-version")
        if version is not None and str(version) != SCHEMA_VERSION:
            self.error_counter.record_at(line_of(data, "schema-version"),
                                         "schema-version %s is not supported, expected %s" % (version, SCHEMA_VERSION))
        for key in data:
            if key in ("__line__", "__fullpath__"):
                continue
            if key not in KNOWN_KEYS:
                self.error_counter.record_at(line_of(data, key), "unknown key %s" % key)

    # read an enum valued field by its string value.
    # on error, record it with line number information and keep the default
    def check_choice_field(self, data: dict, key: str, choices: Type[Enum], default_value: Enum):
        value = data.get(key)
        if value is None:
            return default_value
        try:
            return choices(value)
        except ValueError:
            allowed = ", ".join(c.value for c in choices)
            self.error_counter.record_at(line_of(data, key),
                                         "@%s: %s is not one of %s" % (key, value, allowed))
            return default_value

    def check_bool_field(self, data: dict, key: str, default_value: bool) -> bool:
        value = data.get(key)
        if value is None:
            return default_value
        if not isinstance(value, bool):
            self.error_counter.record_at(line_of(data, key),
                                         "@%s: %s is not a boolean" % (key, value))
            return default_value
        return value

    def write_to(self, writer: ConfigWriter):
        writer.comment("Memoizer configuration file")
        writer.comment(" ")
        writer.name("schema-version").value(SCHEMA_VERSION)
        writer.blank_line()

        writer.comment("how cache keys are derived from call arguments:")
        writer.comment("  structural: canonical encoding of all arguments (any arity, nested containers)")
        writer.comment("  single-primitive: the single int/float/str/bool argument itself")
        writer.name("strategy").value(self.strategy.value)
        writer.blank_line()

        writer.comment("what a single-primitive memoizer does with other arguments:")
        writer.comment("  fail: raise ConfigurationError")
        writer.comment("  bypass: call the function directly without caching")
        writer.name("arity-policy").value(self.arity_policy.value)
        writer.blank_line()

        writer.comment("lock each key so concurrent callers compute it only once")
        writer.name("thread-safe").value(self.thread_safe)

    def write_as_yaml(self, path: str):
        p = Path(path).resolve()
        p.parents[0].mkdir(parents=True, exist_ok=True)
        with p.open('w', encoding="utf-8") as s:
            self.write_to(ConfigWriter(s))

    def build(self, fn: Callable, recursive: bool = False) -> Memoizer:
        return Memoizer(fn, strategy=self.strategy, arity_policy=self.arity_policy,
                        thread_safe=self.thread_safe, self_referential=recursive)

    @property
    def fullpath(self) -> Optional[str]:
        if isinstance(self.source_object, dict):
            return self.source_object.get("__fullpath__")
        return None

    @classmethod
    def from_yaml(cls, path: str) -> "MemoizerConfig":
        config = MemoizerConfig()
        config.fill_and_validate(load_file(path))
        return config

    @classmethod
    def from_string(cls, body: str) -> "MemoizerConfig":
        config = MemoizerConfig()
        config.fill_and_validate(load_string(body))
        return config

    @classmethod
    def auto_configure(cls) -> "MemoizerConfig":
        return MemoizerConfig()


# line number of 'key' as recorded by the loader, falling back to the line
# the mapping starts at (or 0 for a mapping that was not loaded from YAML)
def line_of(data: dict, key: Any) -> int:
    line_info = data.get("__line__", {})
    return line_info.get(key, line_info.get("__begin__", 0))
