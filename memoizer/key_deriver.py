import json
from enum import Enum
from typing import Any, Dict, Hashable, List, Set, Tuple

from .errors import ConfigurationError, KeyDerivationError

PRIMITIVE_TYPES = (int, float, str, bool)


class KeyStrategy(Enum):
    SINGLE_PRIMITIVE = "single-primitive"
    STRUCTURAL = "structural"


class KeyDeriver:
    """Maps the arguments of one call to a cache key.

    The strategy is fixed at construction time. SINGLE_PRIMITIVE uses the
    lone argument itself (paired with its type so that 1, 1.0 and True stay
    apart); STRUCTURAL encodes the whole argument sequence into a canonical
    JSON string.
    """

    def __init__(self, strategy: KeyStrategy = KeyStrategy.STRUCTURAL):
        self.strategy = KeyStrategy(strategy)

    def __call__(self, args: Tuple, kwargs: Dict[str, Any]) -> Hashable:
        if self.strategy is KeyStrategy.SINGLE_PRIMITIVE:
            return single_primitive_key(args, kwargs)
        return structural_key(args, kwargs)

    def __repr__(self) -> str:
        return "KeyDeriver(%s)" % self.strategy.value


def single_primitive_key(args: Tuple, kwargs: Dict[str, Any]) -> Tuple[str, Any]:
    if len(args) != 1 or kwargs:
        raise ConfigurationError(
            "single-primitive key strategy needs exactly one positional argument, got %d positional and %d keyword" % (len(args), len(kwargs)))
    value = args[0]
    # exact type check: subclasses such as IntEnum are not primitives here
    if type(value) not in PRIMITIVE_TYPES:
        raise ConfigurationError(
            "single-primitive key strategy cannot use an argument of type %s" % type(value).__name__)
    if type(value) is float:
        # nan never equals itself, so floats are keyed by their repr
        return ("float", repr(value))
    return (type(value).__name__, value)


def structural_key(args: Tuple, kwargs: Dict[str, Any]) -> str:
    active: Set[int] = set()
    try:
        encoded_kwargs = [[name, encode_value(value, active)]
                          for name, value in sorted(kwargs.items())]
        document = [[encode_value(value, active) for value in args], encoded_kwargs]
        return _dump(document)
    except RecursionError:
        raise KeyDerivationError(
            "cannot derive cache key: arguments nested too deeply") from None


# encode one value into a tagged, JSON-serializable form.
# 'active' holds the ids of the containers on the current path, which is how
# circular references are detected.
def encode_value(value: Any, active: Set[int]) -> List:
    if value is None:
        return ["none"]
    if isinstance(value, bool):
        return ["bool", value]
    if isinstance(value, int):
        # hex has no digit limit, unlike str() on 3.11+
        return ["int", format(value, "x")]
    if isinstance(value, float):
        # repr keeps nan/inf encodable and round-trips every float
        return ["float", repr(value)]
    if isinstance(value, str):
        return ["str", value]
    if isinstance(value, (bytes, bytearray)):
        return ["bytes", bytes(value).hex()]
    if isinstance(value, (list, tuple, dict, set, frozenset)):
        if id(value) in active:
            raise KeyDerivationError(
                "cannot derive cache key: circular reference through %s" % type(value).__name__)
        active.add(id(value))
        try:
            return _encode_container(value, active)
        finally:
            active.discard(id(value))
    raise KeyDerivationError(
        "cannot derive cache key from a value of type %s" % type(value).__name__)


def _encode_container(value: Any, active: Set[int]) -> List:
    if isinstance(value, dict):
        items = [[encode_value(k, active), encode_value(v, active)]
                 for k, v in value.items()]
        items.sort(key=lambda item: _dump(item[0]))
        return ["dict", items]
    if isinstance(value, (set, frozenset)):
        members = sorted((encode_value(e, active) for e in value), key=_dump)
        return ["set", members]
    tag = "tuple" if isinstance(value, tuple) else "list"
    return [tag, [encode_value(e, active) for e in value]]


def _dump(document: Any) -> str:
    return json.dumps(document, separators=(",", ":"), ensure_ascii=False)
