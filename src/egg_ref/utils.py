from __future__ import annotations

import os

from .types import (
    EggValue,
    EggBool,
    EggNumber,
    EggString,
)

DEBUG_PY_TRACE_ENV = "EGG_DEBUG_PY_TRACE"


def debug_py_trace_enabled() -> bool:
    """True when error reports should include the Python traceback."""
    return os.environ.get(DEBUG_PY_TRACE_ENV, "").strip().lower() in ("1", "true", "yes", "on")


def stringify(value: EggValue) -> str:
    """Render a value the way `print` shows it (strings unquoted)."""
    if isinstance(value, EggString):
        return value.value

    return repr(value)


def egg_equals(lhs: EggValue, rhs: EggValue) -> bool:
    match lhs, rhs:
        case (EggNumber(value=a), EggNumber(value=b)):
            return a == b
        case (EggString(value=a), EggString(value=b)):
            return a == b
        case (EggBool(value=a), EggBool(value=b)):
            return a == b
        case _:
            return lhs is rhs
