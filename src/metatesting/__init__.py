"""Checks, testsets, and tools for observing check outcomes programmatically."""

from metatesting.assertions import check, check_broken, check_raises, check_skip
from metatesting.exceptions import (
    FallbackTestSetException,
    MetaTestingError,
    TestSetException,
    UnexpectedResultError,
)
from metatesting.meta import errors, fails, nonpassing_results
from metatesting.results import Broken, Error, Fail, Pass, Result
from metatesting.testset import (
    AbstractTestSet,
    DefaultTestSet,
    EncasedTestSet,
    FallbackTestSet,
    ResultCounts,
    get_test_counts,
    get_testset,
    get_testset_depth,
    testset,
)

__all__ = [
    "AbstractTestSet",
    "Broken",
    "DefaultTestSet",
    "EncasedTestSet",
    "Error",
    "Fail",
    "FallbackTestSet",
    "FallbackTestSetException",
    "MetaTestingError",
    "Pass",
    "Result",
    "ResultCounts",
    "TestSetException",
    "UnexpectedResultError",
    "check",
    "check_broken",
    "check_raises",
    "check_skip",
    "errors",
    "fails",
    "get_test_counts",
    "get_testset",
    "get_testset_depth",
    "nonpassing_results",
    "testset",
]
