import json

import pandas as pd
import pytest

from src.masyu.loader import load_puzzles
from src.masyu.parser import parse_puzzle

from puzzles import PERIMETER_3X3


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_puzzles(str(tmp_path / "nope.txt"))


def test_text_file_is_one_puzzle(tmp_path):
    path = tmp_path / "janko1.txt"
    path.write_text(PERIMETER_3X3)

    records = load_puzzles(str(path))
    assert records == [{"id": "janko1", "puzzle": PERIMETER_3X3}]


def test_json_list_with_grid_rows(tmp_path):
    path = tmp_path / "batch.json"
    path.write_text(json.dumps([
        {"id": "a", "puzzle": PERIMETER_3X3},
        {"grid": ["b . .", ". . w", ". . ."]},
    ]))

    records = load_puzzles(str(path))
    assert [r["id"] for r in records] == ["a", "batch-2"]
    assert parse_puzzle(records[1]["puzzle"]) == parse_puzzle(PERIMETER_3X3)


def test_jsonl_skips_broken_lines(tmp_path):
    path = tmp_path / "batch.jsonl"
    path.write_text(
        json.dumps({"id": "x", "puzzle": PERIMETER_3X3}) + "\n{broken\n\n"
        + json.dumps({"id": "y", "puzzle": PERIMETER_3X3}) + "\n"
    )
    assert [r["id"] for r in load_puzzles(str(path))] == ["x", "y"]


def test_csv_rows_via_pandas(tmp_path):
    path = tmp_path / "batch.csv"
    pd.DataFrame([
        {"id": 7, "puzzle": PERIMETER_3X3},
        {"id": "z", "puzzle": PERIMETER_3X3},
    ]).to_csv(path, index=False)

    records = load_puzzles(str(path))
    assert [r["id"] for r in records] == ["7", "z"]
    assert parse_puzzle(records[0]["puzzle"]).circle_count == 2


def test_parquet_rows_via_pandas(tmp_path):
    pytest.importorskip("pyarrow")
    path = tmp_path / "batch.parquet"
    pd.DataFrame([{"id": "p", "puzzle": PERIMETER_3X3}]).to_parquet(path)

    records = load_puzzles(str(path))
    assert records[0]["id"] == "p"
    assert records[0]["puzzle"] == PERIMETER_3X3
