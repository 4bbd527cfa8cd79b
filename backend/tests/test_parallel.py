import asyncio

from interfacedesign.services.parallel import (
    close_parse_executor,
    get_parse_executor,
    parse_many,
    parse_or_none,
    run_parse,
)


def _parse(name, fail_on=None):
    if name == fail_on:
        raise PermissionError(name)
    if name.startswith("skip"):
        return None
    return name.upper()


def test_results_keep_input_order():
    jobs = [("c",), ("a",), ("b",)]

    assert asyncio.run(parse_many(_parse, jobs)) == ["C", "A", "B"]


def test_failures_and_none_results_are_dropped():
    jobs = [("a", "b"), ("b", "b"), ("skip-me",), ("c",)]

    assert asyncio.run(parse_many(_parse, jobs)) == ["A", "C"]


def test_no_jobs():
    assert asyncio.run(parse_many(_parse, [])) == []


def test_run_parse():
    assert asyncio.run(run_parse(_parse, "x")) == "X"


def test_executor_is_recreated_after_close():
    first = get_parse_executor()
    close_parse_executor()
    second = get_parse_executor()

    assert first is not second
    assert asyncio.run(parse_many(_parse, [("ok",)])) == ["OK"]


def test_parse_or_none():
    assert parse_or_none(_parse, "x") == "X"
    assert parse_or_none(_parse, "x", "x") is None
