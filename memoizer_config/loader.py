import io
import os
from typing import Any

import yaml
from yaml.loader import SafeLoader
from yaml.nodes import ScalarNode


# SafeLoader that annotates every mapping with the line numbers of its keys:
#   mapping["__line__"] = {"key": line, ..., "__begin__": first line}
class ConfigLoader(SafeLoader):
    def construct_mapping(self, node, deep=False):
        mapping = super().construct_mapping(node, deep=deep)
        line_info = {key_node.value: key_node.start_mark.line + 1
                     for key_node, _ in node.value if isinstance(key_node, ScalarNode)}
        line_info["__begin__"] = node.start_mark.line + 1
        mapping["__line__"] = line_info
        return mapping


def load_file(path: str) -> Any:
    with open(path, encoding="utf-8") as file:
        document = yaml.load(file, Loader=ConfigLoader)
    if isinstance(document, dict):
        document["__fullpath__"] = os.path.abspath(path)
    return document


def load_string(body: str) -> Any:
    return yaml.load(io.StringIO(body), Loader=ConfigLoader)
