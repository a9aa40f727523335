"""Tools for testing test utilities themselves.

Checks run through these functions are encased: their outcomes come back as
data instead of being reported to the enclosing testset.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Union

from metatesting.exceptions import UnexpectedResultError
from metatesting.results import Error, Fail, Pass, Result
from metatesting.testset import AbstractTestSet, EncasedTestSet, testset

logger = logging.getLogger(__name__)


def nonpassing_results(f: Callable[[], Any]) -> list[Result]:
    """Run ``f`` with its checks encased and return every non-passing result.

    ``f`` takes no arguments and calls code that uses `check` (possibly inside
    nested `testset` blocks). None of those checks are added to the current
    testset. An exception escaping ``f`` is returned as an `Error` result.
    """
    with testset("nonpassing internal", EncasedTestSet) as ts:
        f()
    return _extract_nonpasses(ts)


def _extract_nonpasses(x: Union[Result, AbstractTestSet, list, tuple]) -> list[Result]:
    "Extract a flat list of non-passing results from a (potentially nested) testset."
    if isinstance(x, Pass):
        return []
    if isinstance(x, Result):
        return [x]
    if isinstance(x, AbstractTestSet):
        return _extract_nonpasses(x.results)
    if not isinstance(x, (list, tuple)):
        raise TypeError(f"cannot extract results from {type(x).__name__}")

    nonpasses: list[Result] = []
    for item in x:
        nonpasses.extend(_extract_nonpasses(item))
    return nonpasses


def fails(f: Callable[[], Any]) -> bool:
    """Return True if at least one check run by ``f`` fails.

    If a check errors instead, the error is logged with its original
    traceback and `UnexpectedResultError` is raised from the original
    exception.
    """
    did_fail = False
    for result in nonpassing_results(f):
        did_fail |= isinstance(result, Fail)
        if isinstance(result, Error):
            logger.error("Error occurred during `fails`:\n%s", result)
            raise UnexpectedResultError("Error occurred during `fails`") from result.exception
    return did_fail


def errors(f: Callable[[], Any], msg_pattern: Union[str, re.Pattern] = "") -> bool:
    """Return True if at least one error matching ``msg_pattern`` is recorded.

    ``msg_pattern`` is a string that must be contained in the error message,
    or a compiled regex searched for in it. The default empty string matches
    any error.

    If a check fails (rather than passing or erroring) `UnexpectedResultError`
    is raised.
    """
    for result in nonpassing_results(f):
        if isinstance(result, Fail):
            raise UnexpectedResultError(f"Test actually failed (not errored): \n {result}")
        if isinstance(result, Error) and _occursin(msg_pattern, result.value):
            return True
    return False  # no matching error occurred


def _occursin(pattern: Union[str, re.Pattern], text: str) -> bool:
    if isinstance(pattern, re.Pattern):
        return pattern.search(text) is not None
    return pattern in text
