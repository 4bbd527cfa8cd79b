import asyncio

from samples import EXCEPTION_TWO_RECOVERIES, write

from interfacedesign.services import collection
from interfacedesign.services.collection import (
    DETAIL_PARSERS,
    category_label,
    group_by_category,
    group_by_severity,
    load_category,
    load_detail,
    sort_by_category,
    sort_by_name,
)


def test_load_category_drops_malformed_and_foreign_files(catalog):
    functions = asyncio.run(load_category(catalog, "functions"))

    assert sorted(f.id for f in functions) == ["F01", "writeFile"]


def test_load_category_skips_documents_of_another_kind(catalog):
    exceptions = asyncio.run(load_category(catalog, "exceptions"))

    assert sorted(e.name for e in exceptions) == ["FileNotFoundException", "TimeoutException"]


def test_missing_category_directory_is_empty(tmp_path):
    assert asyncio.run(load_category(tmp_path, "functions")) == []


def test_unknown_category_is_empty(catalog):
    assert asyncio.run(load_category(catalog, "widgets")) == []


def test_load_category_is_repeatable(catalog):
    first = [t.to_dict() for t in asyncio.run(load_category(catalog, "types"))]
    second = [t.to_dict() for t in asyncio.run(load_category(catalog, "types"))]

    assert first == second


def test_sorting(catalog):
    types = sort_by_category(asyncio.run(load_category(catalog, "types")))
    enums = sort_by_name(asyncio.run(load_category(catalog, "enums")))

    assert [t.name for t in types] == ["ReadResult", "Handle"]
    assert [e.name for e in enums] == ["Alpha", "Color"]


def test_grouping_uses_category_label(catalog):
    functions = sort_by_category(asyncio.run(load_category(catalog, "functions")))

    grouped = group_by_category(functions)

    assert list(grouped) == ["Dateizugriff"]
    assert [f["name"] for f in grouped["Dateizugriff"]] == ["readFile", "writeFile"]
    assert grouped["Dateizugriff"][0]["filePath"].endswith("readFile.xml")


def test_grouping_by_severity(catalog):
    exceptions = sort_by_category(asyncio.run(load_category(catalog, "exceptions")))

    by_severity = group_by_severity(exceptions)

    assert {k: len(v) for k, v in by_severity.items()} == {"High": 1, "Medium": 1}


def test_category_label_of_uncategorized(catalog):
    handle = load_detail(catalog, "types", "Handle")

    assert category_label(handle) == "Uncategorized"


def test_load_detail(catalog):
    detail = load_detail(catalog, "functions", "readFile")

    assert detail.id == "F01"
    assert [s["number"] for s in detail.detailed_steps] == [1, 2, 3]
    assert load_detail(catalog, "functions", "missing") is None
    assert load_detail(catalog, "functions", "broken") is None


def test_load_detail_turns_parser_failure_into_none(catalog, monkeypatch):
    def fail(file_path):
        raise AttributeError("'list' object has no attribute 'get'")

    monkeypatch.setitem(DETAIL_PARSERS, "exceptions", fail)

    assert load_detail(catalog, "exceptions", "FileNotFoundException") is None


def test_load_detail_with_repeated_recovery(catalog):
    write(catalog / "exceptions" / "E.xml", EXCEPTION_TWO_RECOVERIES)

    detail = load_detail(catalog, "exceptions", "E")

    assert detail.name == "E"
    assert detail.recovery["action"]["de"] == "a"


def test_load_category_lists_files_in_parse_pool(catalog, monkeypatch):
    listed = []

    async def recording_run_parse(parser, *args):
        listed.append(parser.__name__)
        return parser(*args)

    monkeypatch.setattr(collection, "run_parse", recording_run_parse)

    functions = asyncio.run(load_category(catalog, "functions"))

    assert listed == ["list_xml_files"]
    assert len(functions) == 2
