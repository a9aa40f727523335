"""Checks that record their outcome into the current testset."""

from __future__ import annotations

import inspect
from typing import Any, Callable, Union

from metatesting.results import Broken, Error, Fail, Pass, Result
from metatesting.testset import get_testset

Condition = Union[bool, Callable[[], Any]]


def _caller_source() -> str | None:
    # Two frames up: past this helper and the check function itself.
    frame = inspect.currentframe()
    try:
        caller = frame.f_back.f_back if frame and frame.f_back else None
        if caller is None:
            return None
        return f"{caller.f_code.co_filename}:{caller.f_lineno}"
    finally:
        del frame


def _describe(condition: Condition, expr: str | None) -> str:
    if expr is not None:
        return expr
    if callable(condition):
        return getattr(condition, "__qualname__", repr(condition))
    return repr(condition)


def _record(result: Result) -> Result:
    return get_testset().record(result)


def check(condition: Condition, expr: str | None = None) -> Result:
    """Check that ``condition`` is True and record the outcome.

    ``condition`` is either a bool or a zero-argument callable, which is
    evaluated here so that an exception it raises is recorded as an `Error`
    rather than escaping. ``expr`` is the text shown for the check; it
    defaults to the repr of the value or the name of the callable.
    """
    source = _caller_source()
    orig_expr = _describe(condition, expr)
    try:
        value = condition() if callable(condition) else condition
    except Exception as e:
        return _record(Error.from_exception("test_error", orig_expr, e, source))

    if value is True:
        return _record(Pass("test", orig_expr, value=value, source=source))
    if value is False:
        return _record(Fail("test", orig_expr, value=value, source=source))
    return _record(
        Error("test_nonbool", orig_expr, value=repr(value), source=source)
    )


def check_broken(condition: Condition, expr: str | None = None) -> Result:
    """Check a condition that is known not to hold yet.

    False (or an exception) is recorded as `Broken`; True is an error, since
    the check should then be turned into a plain `check`.
    """
    source = _caller_source()
    orig_expr = _describe(condition, expr)
    try:
        value = condition() if callable(condition) else condition
    except Exception:
        return _record(Broken("test", orig_expr, source))

    if value is True:
        return _record(
            Error("test_unbroken", orig_expr, value="Unexpected Pass", source=source)
        )
    return _record(Broken("test", orig_expr, source))


def check_skip(condition: Condition, expr: str | None = None) -> Result:
    """Record a skipped check without evaluating it."""
    return _record(Broken("skipped", _describe(condition, expr), _caller_source()))


def _matches(expected: type[Exception] | Exception, exc: Exception) -> bool:
    if isinstance(expected, type):
        return isinstance(exc, expected)
    return type(exc) is type(expected) and exc.args == expected.args


def check_raises(
    expected: type[Exception] | Exception,
    func: Callable[[], Any],
    expr: str | None = None,
) -> Result:
    """Check that calling ``func`` raises ``expected``.

    ``expected`` is an exception class, matched with isinstance, or an
    exception instance, matched on type and args.
    """
    source = _caller_source()
    orig_expr = _describe(func, expr)
    try:
        returned = func()
    except Exception as e:
        if _matches(expected, e):
            return _record(
                Pass("test_throws", orig_expr, data=expected, value=e, source=source)
            )
        return _record(
            Fail("test_throws_wrong", orig_expr, data=expected, value=repr(e), source=source)
        )
    return _record(
        Fail(
            "test_throws_nothing",
            orig_expr,
            data=expected,
            value=f"no exception, returned {returned!r}",
            source=source,
        )
    )
