# write a commented configuration document as YAML text.
# the configuration is a flat mapping of scalars, so neither nesting nor
# sequences are supported.

from typing import Any, TextIO


class ConfigWriter:
    def __init__(self, stream: TextIO):
        self.stream = stream

    def name(self, key: str) -> "ConfigWriter":
        self.stream.write("%s:" % key)
        return self

    def value(self, value: Any) -> "ConfigWriter":
        self.stream.write(" %s\n" % format_scalar(value))
        return self

    def comment(self, body: str) -> "ConfigWriter":
        self.stream.write("# %s\n" % body)
        return self

    def blank_line(self) -> "ConfigWriter":
        self.stream.write("\n")
        return self


def format_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)
