"""Testsets: nested groups of check outcomes, and the ambient stack tracking them."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Iterator, Union

from metatesting.exceptions import FallbackTestSetException, TestSetException
from metatesting.results import Broken, Error, Fail, Pass, Result

logger = logging.getLogger(__name__)

Recordable = Union[Result, "AbstractTestSet"]


class AbstractTestSet(ABC):
    """A named group of outcomes and nested testsets."""

    def __init__(self, description: str):
        self.description = description
        self.results: list[Recordable] = []

    @abstractmethod
    def record(self, child: Recordable) -> Recordable:
        """Store a child outcome or finished nested testset, returning it."""

    @abstractmethod
    def finish(self) -> AbstractTestSet:
        """Called once, after the testset has been popped off the stack."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.description!r}, {len(self.results)} results)"


class FallbackTestSet(AbstractTestSet):
    """Handler used when a check runs outside any testset.

    Passes and broken checks are ignored; anything else raises immediately.
    """

    def __init__(self):
        super().__init__("fallback")

    def record(self, child: Recordable) -> Recordable:
        if isinstance(child, (Fail, Error)):
            logger.error("%s", child)
            raise FallbackTestSetException(child)
        return child

    def finish(self) -> AbstractTestSet:
        return self


_FALLBACK = FallbackTestSet()

_testsets: ContextVar[tuple[AbstractTestSet, ...]] = ContextVar(
    "metatesting_testsets", default=()
)


def get_testset_depth() -> int:
    """Number of testsets currently active."""
    return len(_testsets.get())


def get_testset() -> AbstractTestSet:
    """Innermost active testset, or the fallback handler at the top level."""
    stack = _testsets.get()
    return stack[-1] if stack else _FALLBACK


def _inside_encased() -> bool:
    return any(isinstance(ts, EncasedTestSet) for ts in _testsets.get())


@dataclass
class ResultCounts:
    passes: int = 0
    fails: int = 0
    errors: int = 0
    broken: int = 0

    @property
    def total(self) -> int:
        return self.passes + self.fails + self.errors + self.broken

    def __iadd__(self, other: ResultCounts) -> ResultCounts:
        self.passes += other.passes
        self.fails += other.fails
        self.errors += other.errors
        self.broken += other.broken
        return self


def get_test_counts(ts: AbstractTestSet) -> ResultCounts:
    """Count outcomes in a testset, including all nested testsets."""
    counts = ResultCounts()
    for child in ts.results:
        if isinstance(child, Pass):
            counts.passes += 1
        elif isinstance(child, Fail):
            counts.fails += 1
        elif isinstance(child, Error):
            counts.errors += 1
        elif isinstance(child, Broken):
            counts.broken += 1
        elif isinstance(child, AbstractTestSet):
            counts += get_test_counts(child)
    return counts


class DefaultTestSet(AbstractTestSet):
    """Reporting testset.

    Nested instances hand themselves to their parent when finished. A
    top-level instance logs a summary and raises `TestSetException` if
    anything in its tree failed or errored.
    """

    def __init__(self, description: str, verbose: bool = False, show_timing: bool = True):
        super().__init__(description)
        self.verbose = verbose
        self.show_timing = show_timing
        self.time_start = time.perf_counter()
        self.time_end: float | None = None

    @property
    def elapsed(self) -> float | None:
        if self.time_end is None:
            return None
        return self.time_end - self.time_start

    def record(self, child: Recordable) -> Recordable:
        if isinstance(child, (Fail, Error)):
            # Inside an encased testset nothing may surface above debug level
            level = logging.DEBUG if _inside_encased() else logging.ERROR
            logger.log(level, "%s: %s", self.description, child)
        self.results.append(child)
        return child

    def finish(self) -> AbstractTestSet:
        self.time_end = time.perf_counter()
        if get_testset_depth() != 0:
            get_testset().record(self)
            return self

        from metatesting.reporting.text import format_summary

        logger.info("%s", format_summary(self))
        counts = get_test_counts(self)
        if counts.fails or counts.errors:
            raise TestSetException(self, counts)
        return self


class EncasedTestSet(AbstractTestSet):
    """A testset that encases all results recorded into it.

    Nothing propagates to the parent testset, or to the fallback handler
    that raises on any non-passing result: not passes, not failures, not
    even errors. The only exception is an encased parent, which lets
    nested blocks inside an encased testset keep their results together.
    This makes the outcomes of checks observable as plain data.
    """

    def record(self, child: Recordable) -> Recordable:
        logger.debug("%s: recorded %s", self.description, type(child).__name__)
        self.results.append(child)
        return child

    def finish(self) -> AbstractTestSet:
        if get_testset_depth() != 0:
            parent = get_testset()
            if isinstance(parent, EncasedTestSet):
                parent.record(self)
        return self


@contextmanager
def testset(
    description: str,
    testset_type: type[AbstractTestSet] | None = None,
    **options: Any,
) -> Iterator[AbstractTestSet]:
    """Group the checks run inside the block under a new testset.

    Without an explicit ``testset_type`` the new testset is a `DefaultTestSet`
    at the top level and takes the type of the enclosing testset otherwise.
    Exceptions raised in the block are recorded as `Error` results instead of
    propagating. The testset is finished after it has been popped.
    """
    if testset_type is None:
        testset_type = DefaultTestSet if get_testset_depth() == 0 else type(get_testset())
    ts = testset_type(description, **options)

    token = _testsets.set(_testsets.get() + (ts,))
    try:
        yield ts
    except Exception as e:
        ts.record(Error.from_exception("nontest_error", None, e))
    finally:
        _testsets.reset(token)
    ts.finish()


# keep pytest from collecting `testset` when it is imported into a test module
testset.__test__ = False
