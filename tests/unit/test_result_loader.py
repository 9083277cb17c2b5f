import json
from pathlib import Path

import pytest

from search_render.errors import (
    InvalidPageError,
    StorageConsistencyError,
    StorageDecodeError,
    StorageReadError,
)
from search_render.results.loader import ResultPageLoader, parse_page_number

IDENTITY = "a26c524048b9abdd"


def _write_query(root: Path, pages: list[list[dict]], packages: list[str]) -> Path:
    directory = root / IDENTITY
    directory.mkdir(parents=True)
    for number, records in enumerate(pages):
        (directory / f"page_{number}.json").write_text(json.dumps(records), encoding="utf-8")
    (directory / "packages.json").write_text(
        json.dumps({"Packages": packages}), encoding="utf-8"
    )
    return directory


def _match(path: str, line: int) -> dict:
    return {
        "Path": path,
        "Line": line,
        "PathRank": 0.25,
        "Ranking": 0.5,
        "Context": "int main(void)",
        "Ctxp2": "",
        "Ctxp1": "#include <stdio.h>",
        "Ctxn1": "{",
        "Ctxn2": "",
    }


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, 0), ("", 0), ("0", 0), ("7", 7), ("+3", 3), ("010", 10)],
)
def test_parse_page_number(raw: str | None, expected: int) -> None:
    assert parse_page_number(raw) == expected


@pytest.mark.parametrize("raw", ["abc", "-1", "1.5", " 1", "1_0", "٣", "0x10"])
def test_parse_page_number_rejects_invalid(raw: str) -> None:
    with pytest.raises(InvalidPageError) as exc_info:
        parse_page_number(raw)
    assert exc_info.value.status_code == 400


def test_load_page_and_packages(tmp_path: Path) -> None:
    _write_query(
        tmp_path,
        [[_match("a_1/x.c", 1)], [_match("b_2/y.c", 2), _match("c_3/z.c", 3)]],
        ["a", "b", "c"],
    )
    loader = ResultPageLoader(tmp_path)

    loaded = loader.load(IDENTITY, 1)

    assert loaded.page == 1
    assert [record.path for record in loaded.results] == ["b_2/y.c", "c_3/z.c"]
    assert loaded.results[0].ctxp1 == "#include <stdio.h>"
    assert loaded.packages == ["a", "b", "c"]


def test_missing_page_file_is_storage_error(tmp_path: Path) -> None:
    _write_query(tmp_path, [[_match("a_1/x.c", 1)]], ["a"])
    loader = ResultPageLoader(tmp_path)

    with pytest.raises(StorageReadError) as exc_info:
        loader.load(IDENTITY, 5)
    assert "Could not open results file on disk" in str(exc_info.value)
    assert exc_info.value.status_code == 500


def test_missing_packages_file_is_storage_error(tmp_path: Path) -> None:
    directory = _write_query(tmp_path, [[_match("a_1/x.c", 1)]], ["a"])
    (directory / "packages.json").unlink()

    with pytest.raises(StorageReadError, match="packages"):
        ResultPageLoader(tmp_path).load(IDENTITY, 0)


def test_corrupt_files_are_decode_errors(tmp_path: Path) -> None:
    directory = _write_query(tmp_path, [[_match("a_1/x.c", 1)]], ["a"])
    loader = ResultPageLoader(tmp_path)

    (directory / "page_0.json").write_text("[{", encoding="utf-8")
    with pytest.raises(StorageDecodeError, match="Could not parse results"):
        loader.load_results(IDENTITY, 0)

    (directory / "packages.json").write_text('{"Packages": 3}', encoding="utf-8")
    with pytest.raises(StorageConsistencyError, match="Could not parse packages"):
        loader.load_packages(IDENTITY)
