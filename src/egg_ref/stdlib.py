"""Built-in host values (true/false, operators, arrays, print) registered via egg_ref.runtime."""

from __future__ import annotations

import math
from typing import List

from .runtime import register_constant, register_stdlib, EggIndexError, EggTypeError
from .types import EggArray, EggBool, EggNumber, EggString, EggValue
from .utils import egg_equals, stringify

register_constant("true", EggBool(True))
register_constant("false", EggBool(False))

def _numbers(op: str, args: List[EggValue]) -> tuple[float, float]:
    lhs, rhs = args

    if not isinstance(lhs, EggNumber) or not isinstance(rhs, EggNumber):
        raise EggTypeError(f"'{op}' expects two numbers; got {lhs!r} and {rhs!r}")

    return lhs.value, rhs.value

@register_stdlib("+", arity=2)
def std_add(args: List[EggValue]) -> EggValue:
    lhs, rhs = args

    if isinstance(lhs, EggString) or isinstance(rhs, EggString):
        return EggString(stringify(lhs) + stringify(rhs))

    a, b = _numbers("+", args)
    return EggNumber(a + b)

@register_stdlib("-", arity=2)
def std_sub(args: List[EggValue]) -> EggNumber:
    a, b = _numbers("-", args)
    return EggNumber(a - b)

@register_stdlib("*", arity=2)
def std_mul(args: List[EggValue]) -> EggNumber:
    a, b = _numbers("*", args)
    return EggNumber(a * b)

@register_stdlib("/", arity=2)
def std_div(args: List[EggValue]) -> EggNumber:
    a, b = _numbers("/", args)

    if b == 0:
        # IEEE semantics: x/0 is a signed infinity, 0/0 is nan
        if a == 0 or math.isnan(a):
            return EggNumber(math.nan)
        return EggNumber(math.copysign(math.inf, a) * math.copysign(1.0, b))

    return EggNumber(a / b)

@register_stdlib("==", arity=2)
def std_eq(args: List[EggValue]) -> EggBool:
    lhs, rhs = args
    return EggBool(egg_equals(lhs, rhs))

def _ordered(op: str, args: List[EggValue]) -> tuple:
    lhs, rhs = args

    match lhs, rhs:
        case (EggNumber(value=a), EggNumber(value=b)):
            return a, b
        case (EggString(value=a), EggString(value=b)):
            return a, b

    raise EggTypeError(f"'{op}' expects two numbers or two strings; got {lhs!r} and {rhs!r}")

@register_stdlib("<", arity=2)
def std_lt(args: List[EggValue]) -> EggBool:
    a, b = _ordered("<", args)
    return EggBool(a < b)

@register_stdlib(">", arity=2)
def std_gt(args: List[EggValue]) -> EggBool:
    a, b = _ordered(">", args)
    return EggBool(a > b)

@register_stdlib("array")
def std_array(args: List[EggValue]) -> EggArray:
    return EggArray(list(args))

def _array_arg(fn: str, value: EggValue) -> EggArray:
    if isinstance(value, EggArray):
        return value

    raise EggTypeError(f"{fn} expects an array; got {value!r}")

@register_stdlib("length", arity=1)
def std_length(args: List[EggValue]) -> EggNumber:
    arr = _array_arg("length", args[0])
    return EggNumber(len(arr.items))

@register_stdlib("element", arity=2)
def std_element(args: List[EggValue]) -> EggValue:
    arr = _array_arg("element", args[0])
    index = args[1]

    if not isinstance(index, EggNumber) or not float(index.value).is_integer():
        raise EggTypeError(f"element expects an integer index; got {index!r}")

    i = int(index.value)
    if i < 0 or i >= len(arr.items):
        raise EggIndexError(f"element index {i} out of range for array of length {len(arr.items)}")

    return arr.items[i]

@register_stdlib("print", arity=1)
def std_print(args: List[EggValue]) -> EggValue:
    value = args[0]
    print(stringify(value))
    return value
