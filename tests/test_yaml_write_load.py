import io

from memoizer_config.loader import load_string
from memoizer_config.writer import ConfigWriter

# 　Write YAML and read it with line numbers


def test_yaml_read_write():
    b = make_sample_yaml()
    v = load_string(b)
    line_info = v["__line__"]
    assert v["key0"] == "value0"
    assert v["key1"] is True
    assert v["key2"] is None
    assert line_info["key0"] == 2
    assert line_info["key1"] == 4
    assert line_info["__begin__"] == 2


# expected yaml
# # sample
# key0: value0
#
# key1: true
# key2: null

def make_sample_yaml() -> str:
    s = io.StringIO()
    writer = ConfigWriter(s)
    writer.comment("sample")
    writer.name("key0").value("value0")
    writer.blank_line()
    writer.name("key1").value(True)
    writer.name("key2").value(None)
    return s.getvalue()
