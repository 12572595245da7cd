import functools
from collections import Counter
from typing import Callable, Hashable, Optional, Tuple

from memoizer import KeyDerivationError
from memoizer.key_deriver import structural_key


# spy that records how often wrapped functions really run.
# calls are counted in total and per positional argument tuple.
class CallCounter:
    def __init__(self):
        self.count = 0
        self.per_args: Counter = Counter()

    def wrap(self, fn: Callable) -> Callable:
        @functools.wraps(fn)
        def counted(*args, **kwargs):
            self.count += 1
            key = args_key(args)
            if key is not None:
                self.per_args[key] += 1
            return fn(*args, **kwargs)
        return counted

    def calls_with(self, *args) -> int:
        key = args_key(args)
        return self.per_args[key] if key is not None else 0

    def reset(self) -> None:
        self.count = 0
        self.per_args.clear()


# hashable argument tuples are used as they are; lists, dicts and other
# containers go through the structural key. arguments that cannot be keyed at
# all are only counted in the total.
def args_key(args: Tuple) -> Optional[Hashable]:
    try:
        hash(args)
        return args
    except TypeError:
        pass
    try:
        return structural_key(args, {})
    except KeyDerivationError:
        return None
