from __future__ import annotations

from textwrap import dedent

import pytest

from tests.support.harness import (
    EggReferenceError,
    EggRuntimeError,
    EggSyntaxError,
    EggTypeError,
    run_program,
    run_runtime_case,
)
from egg_ref.runtime import Environment, call_value
from egg_ref.types import EggFn, EggNumber

SCENARIOS = [
    pytest.param("fun(1)", ("fn", 0), None, id="fun-nullary"),
    pytest.param("fun(a, b, +(a, b))", ("fn", 2), None, id="fun-binary"),
    pytest.param("do(define(add, fun(a, b, +(a, b))), add(2, 3))", ("number", 5), None, id="call-user-fn"),
    pytest.param("fun(x, *(x, 2))(21)", ("number", 42), None, id="call-fun-literal"),
    pytest.param(
        "do(define(adder, fun(a, fun(b, +(a, b)))), adder(3)(4))",
        ("number", 7),
        None,
        id="call-chained",
    ),
    pytest.param(
        "do(define(pick, fun(flag, if(flag, +, -))), pick(false)(10, 4))",
        ("number", 6),
        None,
        id="call-computed-operator",
    ),
    pytest.param(
        dedent(
            """\
            do(define(pow, fun(base, exp,
                 if(==(exp, 0),
                    1,
                    *(base, pow(base, -(exp, 1)))))),
               pow(2, 10))
        """
        ),
        ("number", 1024),
        None,
        id="recursion-pow",
    ),
    pytest.param(
        dedent(
            """\
            do(define(fib, fun(n,
                 if(<(n, 2), n, +(fib(-(n, 1)), fib(-(n, 2)))))),
               fib(15))
        """
        ),
        ("number", 610),
        None,
        id="recursion-fib",
    ),
    pytest.param(
        "do(define(twice, fun(f, x, f(f(x)))), twice(fun(n, *(n, 3)), 2))",
        ("number", 18),
        None,
        id="higher-order",
    ),
    pytest.param(
        "do(define(f, fun(a, b, a)), f(1))",
        None,
        EggTypeError,
        id="arity-too-few",
    ),
    pytest.param(
        "do(define(f, fun(a, b, a)), f(1, 2, 3))",
        None,
        EggTypeError,
        id="arity-too-many",
    ),
    pytest.param("fun(1)(1)", None, EggTypeError, id="arity-nullary-with-arg"),
    pytest.param("+(1)", None, EggTypeError, id="arity-builtin"),
    pytest.param("print(1, 2)", None, EggTypeError, id="arity-builtin-print"),
    pytest.param("1(2)", None, EggTypeError, id="apply-number"),
    pytest.param('"s"()', None, EggTypeError, id="apply-string"),
    pytest.param("do(define(x, 5), x(1))", None, EggTypeError, id="apply-bound-number"),
    pytest.param("1(missing)", None, EggTypeError, id="apply-checks-callee-before-args"),
    pytest.param("missing(1)", None, EggReferenceError, id="apply-undefined-callee"),
    pytest.param("fun()", None, EggSyntaxError, id="fun-without-body"),
    pytest.param("fun(1, x)", None, EggSyntaxError, id="fun-literal-param"),
    pytest.param("fun(f(a), x)", None, EggSyntaxError, id="fun-application-param"),
    pytest.param(
        "do(define(f, fun(a, missing)), 1)",
        ("number", 1),
        None,
        id="fun-body-not-evaluated-at-construction",
    ),
]


@pytest.mark.parametrize("source, expectation, expected_exc", SCENARIOS)
def test_functions(source: str, expectation, expected_exc) -> None:
    run_runtime_case(source, expectation, expected_exc)


def test_fun_captures_defining_environment(env: Environment) -> None:
    fn = run_program("fun(a, a)", env=env)

    assert isinstance(fn, EggFn)
    assert fn.env is env
    assert fn.params == ["a"]


def test_each_call_gets_fresh_scope(env: Environment) -> None:
    fn = run_program("fun(a, do(define(local, a), local))", env=env)

    assert call_value(fn, [EggNumber(1)]) == EggNumber(1)
    assert call_value(fn, [EggNumber(2)]) == EggNumber(2)
    assert "local" not in env.vars


def test_wrong_arity_never_pads_or_truncates(env: Environment) -> None:
    fn = run_program("fun(a, b, b)", env=env)

    with pytest.raises(EggTypeError, match="wrong number of arguments"):
        call_value(fn, [EggNumber(1)])

    with pytest.raises(EggTypeError, match="wrong number of arguments"):
        call_value(fn, [EggNumber(1), EggNumber(2), EggNumber(3)])


def test_call_value_rejects_non_functions() -> None:
    with pytest.raises(EggTypeError, match="applying a non-function"):
        call_value(EggNumber(1), [])


COUNTDOWN = "do(define(count, fun(n, if(==(n, 0), 0, +(1, count(-(n, 1)))))), count({depth}))"


def test_non_tail_recursion_runs_hundreds_deep() -> None:
    assert run_program(COUNTDOWN.format(depth=500)) == EggNumber(500)


def test_runaway_recursion_is_an_egg_error() -> None:
    with pytest.raises(EggRuntimeError, match="maximum recursion depth exceeded"):
        run_program("do(define(spin, fun(n, +(1, spin(n)))), spin(0))")

    assert run_program(COUNTDOWN.format(depth=10)) == EggNumber(10)
