"""Tests for encased checks: nonpassing_results, fails, errors."""

from __future__ import annotations

import logging
import re

import pytest

from metatesting import (
    Broken,
    DefaultTestSet,
    EncasedTestSet,
    Error,
    Fail,
    Pass,
    UnexpectedResultError,
    check,
    check_broken,
    errors,
    fails,
    get_testset_depth,
    nonpassing_results,
    testset,
)
from metatesting.meta import _extract_nonpasses


def _boom(msg):
    raise RuntimeError(msg)


# --- nonpassing_results ---


def test_no_checks():
    assert nonpassing_results(lambda: None) == []


def test_no_failures():
    assert len(nonpassing_results(lambda: check(True))) == 0


def test_single_check():
    bads = nonpassing_results(lambda: check(False))
    assert len(bads) == 1
    assert isinstance(bads[0], Fail)
    assert str(bads[0].orig_expr) == str(False)


def test_single_testset():
    def f():
        with testset("inner"):
            check(lambda: False == True, "False == True")
            check(lambda: True == False, "True == False")

    bads = nonpassing_results(f)
    assert len(bads) == 2
    assert str(bads[0].orig_expr) == "False == True"
    assert str(bads[1].orig_expr) == "True == False"


def test_results_come_back_depth_first_in_issue_order():
    def f():
        check(False, "first")
        with testset("a"):
            check(False, "second")
            with testset("b"):
                check(True, "passing")
                check(False, "third")
        check(False, "fourth")

    bads = nonpassing_results(f)
    assert [b.orig_expr for b in bads] == ["first", "second", "third", "fourth"]


def test_single_error():
    bads = nonpassing_results(lambda: _boom("noo"))
    assert len(bads) == 1
    assert isinstance(bads[0], Error)
    assert bads[0].test_type == "nontest_error"


def test_single_check_erroring():
    bads = nonpassing_results(lambda: check(lambda: _boom("nooo")))
    assert len(bads) == 1
    assert isinstance(bads[0], Error)
    assert bads[0].test_type == "test_error"


def test_single_testset_erroring():
    def f():
        with testset("inner"):
            _boom("noo")

    bads = nonpassing_results(f)
    assert len(bads) == 1
    assert isinstance(bads[0], Error)


def test_error_keeps_original_exception():
    bads = nonpassing_results(lambda: _boom("noo"))
    assert isinstance(bads[0].exception, RuntimeError)
    assert bads[0].exception.args == ("noo",)
    assert "RuntimeError: noo" in bads[0].value


def test_repeated_calls_give_equal_results():
    def f():
        check(True)
        check(False, "nope")
        with testset("inner"):
            _boom("noo")

    first = nonpassing_results(f)
    second = nonpassing_results(f)
    assert first == second
    assert get_testset_depth() == 0


def test_nested_queries_chain_into_the_outer_encased_testset():
    def f():
        inner = nonpassing_results(lambda: check(False, "inner failure"))
        check(len(inner) == 1, "inner saw one failure")

    bads = nonpassing_results(f)
    assert len(bads) == 1
    assert bads[0].orig_expr == "inner failure"


def test_nothing_reaches_the_enclosing_testset(caplog):
    def failing():
        with testset("inner"):
            check(False)

    with caplog.at_level(logging.INFO):
        with testset("outer", DefaultTestSet) as outer:
            check(True)
            nonpassing_results(failing)
            nonpassing_results(lambda: _boom("noo"))
            nonpassing_results(lambda: check(True))

    assert len(outer.results) == 1
    assert isinstance(outer.results[0], Pass)
    assert not [r for r in caplog.records if r.levelno >= logging.ERROR]


# --- _extract_nonpasses ---


def test_extract_from_empty_sequence():
    assert _extract_nonpasses([]) == []


def test_extract_keeps_every_non_pass():
    fail = Fail("test", "x")
    error = Error("test_error", "y", "RuntimeError: y")
    broken = Broken("test", "z")
    assert _extract_nonpasses([Pass("test"), fail, error, broken]) == [fail, error, broken]


def test_extract_walks_nested_testsets():
    outer = EncasedTestSet("outer")
    inner = EncasedTestSet("inner")
    plain = DefaultTestSet("plain")
    first, second, third = Fail("test", "1"), Fail("test", "2"), Fail("test", "3")

    inner.results.extend([Pass("test"), second])
    plain.results.append(third)
    outer.results.extend([first, inner, EncasedTestSet("empty"), plain])

    assert _extract_nonpasses(outer) == [first, second, third]


def test_extract_single_result():
    fail = Fail("test", "x")
    assert _extract_nonpasses(fail) == [fail]
    assert _extract_nonpasses(Pass("test")) == []


# --- fails ---


def test_fails():
    assert not fails(lambda: check(True))
    assert fails(lambda: check(False))
    assert not fails(lambda: check_broken(False))


def test_fails_in_testset():
    def f():
        with testset("eg"):
            check(True)
            check(False)
            check(True)

    assert fails(f)


def test_fails_raises_on_error():
    with pytest.raises(UnexpectedResultError) as exc_info:
        fails(lambda: check(lambda: _boom("Bad")))

    assert "Error occurred during `fails`" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert exc_info.value.__cause__.args == ("Bad",)


def test_fails_logs_the_error(caplog):
    with caplog.at_level(logging.ERROR, logger="metatesting"):
        with pytest.raises(UnexpectedResultError):
            fails(lambda: _boom("Bad"))

    assert "RuntimeError: Bad" in caplog.text


# --- errors ---


def test_errors():
    assert not errors(lambda: check(True))
    assert errors(lambda: _boom("nooo"))
    assert errors(lambda: _boom("nooo"), "noo")
    assert not errors(lambda: _boom("nooo"), "ok")


def test_errors_in_testset():
    def f():
        with testset("eg"):
            check(True)
            _boom("nooo")
            check(True)

    assert errors(f)


def test_errors_with_regex():
    assert errors(lambda: _boom("nooo"), re.compile(r"no+\b"))
    assert not errors(lambda: _boom("nooo"), re.compile(r"^ok$"))


def test_errors_raises_on_failure():
    with pytest.raises(UnexpectedResultError, match="Test actually failed"):
        errors(lambda: check(False))


def test_errors_ignores_broken_checks():
    assert not errors(lambda: check_broken(False))


def test_explicit_default_testset_inside_query_logs_nothing_above_debug(caplog):
    def f():
        with testset("plain", DefaultTestSet):
            check(False, "hidden")
            _boom("also hidden")

    with caplog.at_level(logging.DEBUG):
        bads = nonpassing_results(f)

    assert [type(b) for b in bads] == [Fail, Error]
    assert not [r for r in caplog.records if r.levelno >= logging.ERROR]
    assert "hidden" in caplog.text


def test_extract_rejects_non_sequences():
    with pytest.raises(TypeError):
        _extract_nonpasses("abc")
