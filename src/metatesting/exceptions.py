"""Exceptions raised by the testset machinery and the meta-testing queries."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from metatesting.results import Result
    from metatesting.testset import AbstractTestSet, ResultCounts


class MetaTestingError(Exception):
    """Base class for all metatesting errors."""


class UnexpectedResultError(MetaTestingError):
    """Raised by `fails`/`errors` when the recorded outcomes don't fit the query."""


class TestSetException(MetaTestingError):
    """A top-level testset finished with failures or errors."""

    __test__ = False

    def __init__(self, testset: AbstractTestSet, counts: ResultCounts):
        self.testset = testset
        self.counts = counts
        super().__init__(
            f"Some tests did not pass: {counts.passes} passed, {counts.fails} failed, "
            f"{counts.errors} errored, {counts.broken} broken."
        )


class FallbackTestSetException(MetaTestingError):
    """A check failed or errored outside of any testset."""

    def __init__(self, result: Result):
        self.result = result
        super().__init__(f"There was an error during testing:\n{result}")
