# cache the result of a function call, keyed by its arguments.
# the wrapped function is assumed to be pure: an impure function is only
# correct for the first call of each key.

import functools
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Hashable, Optional, Union

from .errors import ConfigurationError
from .key_deriver import KeyDeriver, KeyStrategy


class ArityPolicy(Enum):
    # raise ConfigurationError when the key strategy rejects the arguments
    FAIL = "fail"
    # call the function directly and cache nothing
    BYPASS = "bypass"


@dataclass(frozen=True)
class CacheInfo:
    hits: int
    misses: int
    bypasses: int
    currsize: int


class Memoizer:
    """Callable wrapper owning a private result cache.

    With ``self_referential=True`` the wrapped function receives this
    memoizer as its first argument and must use it for its recursive calls;
    that argument is not part of the cache key. Otherwise recursion inside
    ``fn`` bypasses the cache entirely.

    With ``thread_safe=True`` lookup, computation and store run under a
    per-key re-entrant lock, so concurrent callers of the same uncached key
    invoke ``fn`` only once.
    """

    def __init__(self, fn: Callable,
                 strategy: Union[KeyStrategy, str] = KeyStrategy.STRUCTURAL,
                 arity_policy: Union[ArityPolicy, str] = ArityPolicy.FAIL,
                 initial_cache: Optional[Dict[Hashable, Any]] = None,
                 thread_safe: bool = False,
                 self_referential: bool = False):
        if not callable(fn):
            raise TypeError("Given object is not callable!: " + repr(fn))
        # copy name and docstring first so the fields below are never overwritten
        # by attributes of fn, for instance when fn is itself a Memoizer
        functools.update_wrapper(self, fn)
        self._fn = fn
        self._key_deriver = KeyDeriver(strategy)
        self._arity_policy = ArityPolicy(arity_policy)
        self._cache: Dict[Hashable, Any] = dict(initial_cache or {})
        self._self_referential = self_referential
        self._hits = 0
        self._misses = 0
        self._bypasses = 0
        self._guard: Optional[threading.Lock] = threading.Lock() if thread_safe else None
        self._key_locks: Dict[Hashable, Any] = {}

    @property
    def strategy(self) -> KeyStrategy:
        return self._key_deriver.strategy

    @property
    def arity_policy(self) -> ArityPolicy:
        return self._arity_policy

    @property
    def thread_safe(self) -> bool:
        return self._guard is not None

    def __call__(self, *args, **kwargs):
        try:
            key = self._key_deriver(args, kwargs)
        except ConfigurationError:
            if self._arity_policy is ArityPolicy.FAIL:
                raise
            self._count("_bypasses")
            return self._invoke(args, kwargs)

        if self._guard is None:
            return self._lookup_or_compute(key, args, kwargs)
        with self._lock_for(key):
            return self._lookup_or_compute(key, args, kwargs)

    def key_for(self, *args, **kwargs) -> Hashable:
        """Return the cache key these arguments map to, without calling fn."""
        return self._key_deriver(args, kwargs)

    def cache_info(self) -> CacheInfo:
        return CacheInfo(self._hits, self._misses, self._bypasses, len(self._cache))

    def _lookup_or_compute(self, key: Hashable, args, kwargs):
        if key in self._cache:  # cache hit
            self._count("_hits")
            return self._cache[key]
        # a raising fn leaves the cache untouched
        value = self._invoke(args, kwargs)
        self._cache[key] = value
        self._count("_misses")
        return value

    def _invoke(self, args, kwargs):
        if self._self_referential:
            return self._fn(self, *args, **kwargs)
        return self._fn(*args, **kwargs)

    def _lock_for(self, key: Hashable):
        with self._guard:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = threading.RLock()
                self._key_locks[key] = lock
            return lock

    def _count(self, name: str) -> None:
        if self._guard is None:
            setattr(self, name, getattr(self, name) + 1)
        else:
            with self._guard:
                setattr(self, name, getattr(self, name) + 1)

    def __set_name__(self, owner, name: str) -> None:
        self._attr_name = name

    # used as a method, every instance gets its own memoizer bound to it.
    # the instance is not part of the key and is stored in its __dict__ so
    # later lookups find the bound memoizer directly.
    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        name = getattr(self, "_attr_name", None) or getattr(self, "__name__", None)
        if name is None or not hasattr(instance, "__dict__"):
            raise TypeError("cannot bind memoized method to %r" % (instance, ))
        bound = Memoizer(functools.partial(self._fn, instance),
                         strategy=self.strategy, arity_policy=self._arity_policy,
                         thread_safe=self.thread_safe,
                         self_referential=self._self_referential)
        instance.__dict__[name] = bound
        return bound

    def __repr__(self) -> str:
        return "<Memoizer %s strategy=%s entries=%d>" % (
            getattr(self._fn, "__qualname__", repr(self._fn)), self.strategy.value, len(self._cache))

    @classmethod
    def recursive(cls, step: Callable, **options) -> "Memoizer":
        # step(recurse, *args) must call recurse(...) for its sub-results
        return cls(step, self_referential=True, **options)


def memoize(fn: Optional[Callable] = None, *, recursive: bool = False, **options):
    """Decorator form of Memoizer, usable bare or with keyword options:

        @memoize
        def double(n): ...

        @memoize(strategy="single-primitive", recursive=True)
        def fib(recurse, n): ...
    """
    def decorate(f: Callable) -> Memoizer:
        return Memoizer(f, self_referential=recursive, **options)

    if fn is None:
        return decorate
    return decorate(fn)
