"""Structural equality and value rendering for failure messages."""

from __future__ import annotations

import functools
import logging
import types
from collections.abc import Mapping
from typing import Any

logger = logging.getLogger(__name__)

_SEQUENCE_EQ = (list.__eq__, tuple.__eq__)

# values whose state is not meaningful attribute data, compared by identity
_OPAQUE = (types.FunctionType, types.BuiltinFunctionType, types.ModuleType, functools.partial)

# Py_TPFLAGS_HEAPTYPE: set on classes created by a class statement
_HEAPTYPE = 1 << 9


def deep_equal(got: Any, want: Any) -> bool:
    """Compare two values structurally.

    Values of different concrete types never compare equal, so ``1`` and
    ``1.0`` (or ``True`` and ``1``) are distinct. Containers are compared
    element by element with the same strictness. Types that define their own
    ``__eq__`` are trusted; a comparison that raises counts as unequal.
    Exceptions compare by ``args`` and attributes, Python-defined objects by
    attribute state, and functions or C-implemented objects by identity.
    """
    return _equal(got, want, set())


def _equal(a: Any, b: Any, seen: set[tuple[int, int]]) -> bool:
    if type(a) is not type(b):
        return False

    key = (id(a), id(b))
    if key in seen:
        return True

    cls = type(a)
    if isinstance(a, (list, tuple)) and cls.__eq__ in _SEQUENCE_EQ:
        seen.add(key)
        return len(a) == len(b) and all(_equal(x, y, seen) for x, y in zip(a, b))

    if isinstance(a, dict) and cls.__eq__ is dict.__eq__:
        seen.add(key)
        if a.keys() != b.keys():
            return False
        return all(_equal(a[k], b[k], seen) for k in a)

    if cls.__eq__ is not object.__eq__:
        return _native_equal(a, b)

    if isinstance(a, BaseException):
        seen.add(key)
        return _equal((a.args, vars(a)), (b.args, vars(b)), seen)

    if isinstance(a, _OPAQUE) or not _is_plain_class(cls):
        # functions, partials and other C-backed values hide their state
        return a is b

    seen.add(key)
    return _equal(_state(a), _state(b), seen)


def _native_equal(a: Any, b: Any) -> bool:
    try:
        result = a == b
        try:
            return bool(result)
        except ValueError:
            # element-wise comparisons (array-likes) are ambiguous as a bool
            return bool(result.all())
    except Exception as e:
        logger.warning(f"Comparing {safe_repr(a)} with {safe_repr(b)} raised {e!r}; treating as unequal")
        return False


def _is_plain_class(cls: type) -> bool:
    """True when every class in the MRO, bar ``object``, is defined in Python."""
    return all(klass.__flags__ & _HEAPTYPE for klass in cls.__mro__[:-1])


def _state(obj: Any) -> dict[str, Any]:
    """Attribute state of a plain object from ``__slots__`` and ``__dict__``."""
    state: dict[str, Any] = {}
    for klass in type(obj).__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot in ("__dict__", "__weakref__"):
                continue
            if hasattr(obj, slot):
                state[slot] = getattr(obj, slot)
    if hasattr(obj, "__dict__"):
        state.update(vars(obj))
    return state


def type_name(value: Any) -> str:
    return type(value).__qualname__


def safe_repr(value: Any) -> str:
    try:
        return repr(value)
    except Exception as e:
        return f"<{type_name(value)} object at {id(value):#x}, repr failed: {e!r}>"


def _safe_str(value: Any) -> str:
    try:
        return str(value)
    except Exception:
        return safe_repr(value)


def describe(value: Any) -> str:
    """Render a value with its type, e.g. ``1 (int)``."""
    return f"{safe_repr(value)} ({type_name(value)})"


def join_parts(*parts: Any) -> str:
    """Join values print-style: ``str`` of each, separated by single spaces."""
    return " ".join(_safe_str(p) for p in parts)


def sprintf(fmt: str, *args: Any) -> str:
    """Apply ``%``-style substitution.

    A single mapping argument enables ``%(name)s`` placeholders. A format that
    does not match its arguments is reported but never raised, so a sloppy
    message cannot break the test that produced it.
    """
    if not args:
        return fmt
    values: Any = args
    if len(args) == 1 and isinstance(args[0], Mapping):
        values = args[0]
    try:
        return fmt % values
    except (TypeError, ValueError, KeyError) as e:
        logger.warning(f"Format {fmt!r} does not match arguments {safe_repr(args)}: {e}")
        return " ".join([fmt, *(safe_repr(a) for a in args)])
