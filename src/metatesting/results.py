"""Outcome types recorded by checks and testsets."""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from typing import Any


class Result:
    """Base class for the outcome of a single check."""


@dataclass
class Pass(Result):
    """The check evaluated to True (or raised what it was expected to)."""

    test_type: str
    orig_expr: str | None = None
    data: Any = None
    value: Any = None
    source: str | None = None


@dataclass
class Fail(Result):
    """The check evaluated to False.

    Attributes:
        test_type: Kind of check ("test", "test_throws_wrong", "test_throws_nothing").
        orig_expr: Text of the checked expression.
        data: Extra detail about the evaluation, if any.
        value: What the expression actually produced (e.g. the wrong exception).
        source: ``file:line`` of the check call.
    """

    test_type: str
    orig_expr: str | None = None
    data: Any = None
    value: Any = None
    source: str | None = None

    def __str__(self) -> str:
        lines = [f"Test Failed at {self.source or 'unknown location'}"]
        lines.append(f"  Expression: {self.orig_expr}")
        if self.value is not None:
            lines.append(f"   Evaluated: {self.value}")
        return "\n".join(lines)


@dataclass
class Error(Result):
    """An unexpected exception was raised while checking or inside a testset.

    ``value`` is the text form of the exception and ``exception`` the original
    object, so callers can re-raise or inspect it. Neither ``exception`` nor
    ``backtrace`` take part in equality.
    """

    test_type: str
    orig_expr: str | None
    value: str
    backtrace: str = field(default="", compare=False)
    source: str | None = None
    exception: BaseException | None = field(default=None, compare=False, repr=False)

    @classmethod
    def from_exception(
        cls,
        test_type: str,
        orig_expr: str | None,
        exc: BaseException,
        source: str | None = None,
    ) -> Error:
        value = "".join(traceback.format_exception_only(type(exc), exc)).strip()
        backtrace = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
        return cls(
            test_type=test_type,
            orig_expr=orig_expr,
            value=value,
            backtrace=backtrace,
            source=source,
            exception=exc,
        )

    def __str__(self) -> str:
        where = self.source or "unknown location"
        if self.test_type == "test_nonbool":
            return (
                f"Error During Test at {where}\n"
                f"  Expression evaluated to non-Boolean\n"
                f"  Expression: {self.orig_expr}\n"
                f"       Value: {self.value}"
            )
        if self.test_type == "test_unbroken":
            return (
                f"Unexpected Pass at {where}\n"
                f"  Expression: {self.orig_expr}\n"
                f"  Got correct result, please change to check() if no longer broken."
            )
        lines = [f"Error During Test at {where}"]
        if self.orig_expr is not None:
            lines.append(f"  Test threw exception\n  Expression: {self.orig_expr}")
        lines.append(f"  {self.value}")
        if self.backtrace:
            lines.append(self.backtrace.rstrip())
        return "\n".join(lines)


@dataclass
class Broken(Result):
    """A check known to be broken failed as expected, or was skipped."""

    test_type: str
    orig_expr: str | None = None
    source: str | None = None
