"""Text and JUnit XML reports for testset trees."""

from metatesting.reporting.junit import write_junit
from metatesting.reporting.text import format_summary

__all__ = ["format_summary", "write_junit"]
