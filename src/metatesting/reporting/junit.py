from __future__ import annotations

from pathlib import Path

from junitparser import Error as JUnitError
from junitparser import Failure, JUnitXml, Skipped, TestCase, TestSuite

from metatesting.results import Broken, Error, Fail, Result
from metatesting.testset import AbstractTestSet


def _case_for(result: Result, classname: str) -> TestCase:
    name = getattr(result, "orig_expr", None) or result.test_type
    case = TestCase(name)
    case.classname = classname
    if isinstance(result, Fail):
        case.result = Failure(str(result), type_=result.test_type)
    elif isinstance(result, Error):
        case.result = JUnitError(result.value, type_=result.test_type)
        if result.backtrace:
            case.system_err = result.backtrace
    elif isinstance(result, Broken):
        case.result = Skipped(result.test_type)
    return case


def _add_suites(xml: JUnitXml, ts: AbstractTestSet, path: list[str]) -> None:
    path = path + [ts.description]
    suite_name = " / ".join(path)
    outcomes = [c for c in ts.results if isinstance(c, Result)]
    if outcomes:
        suite = TestSuite(suite_name)
        for result in outcomes:
            suite.add_testcase(_case_for(result, suite_name))
        elapsed = getattr(ts, "elapsed", None)
        # Set time after add_testcase (add_testcase resets it via update_statistics)
        if elapsed is not None:
            suite.time = float(elapsed)
        xml.append(suite)
    for child in ts.results:
        if isinstance(child, AbstractTestSet):
            _add_suites(xml, child, path)


def write_junit(ts: AbstractTestSet, path: Path) -> Path:
    """Write a testset tree as JUnit XML, one suite per testset holding results."""
    xml = JUnitXml()
    _add_suites(xml, ts, [])
    path.parent.mkdir(parents=True, exist_ok=True)
    xml.write(str(path), pretty=True)
    return path
