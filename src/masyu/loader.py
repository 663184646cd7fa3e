import json
import os
from typing import Any, Dict, List, Optional

import pandas as pd


def load_puzzles(file_path: str) -> List[Dict[str, Any]]:
    """
    Reads puzzles from a file. Handles .txt, .json, .jsonl, .csv and .parquet.
    Returns a list of records ``{"id": ..., "puzzle": <text format>}``.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    stem = os.path.splitext(os.path.basename(file_path))[0]

    def _is_nonempty_str(value: Any) -> bool:
        return isinstance(value, str) and value.strip() != ""

    def _grid_to_text(record: Dict[str, Any]) -> Optional[str]:
        # Records may carry the grid as a list of rows instead of text.
        grid = record.get("grid")
        if not isinstance(grid, list) or not grid:
            return None
        rows = [row.split() if isinstance(row, str) else [str(t) for t in row] for row in grid]
        height = record.get("height", len(rows))
        width = record.get("width", len(rows[0]))
        lines = [f"{height} {width}"] + [" ".join(row) for row in rows]
        return "\n".join(lines)

    def _normalize_record(record: Dict[str, Any], index: int) -> Dict[str, Any]:
        text = record.get("puzzle")
        if not _is_nonempty_str(text):
            text = _grid_to_text(record)
        if text is not None:
            record["puzzle"] = text

        if record.get("id") is not None and not isinstance(record["id"], str):
            record["id"] = str(record["id"])
        if not _is_nonempty_str(record.get("id")):
            record["id"] = stem if index == 0 else f"{stem}-{index}"
        return record

    def _normalize_all(records: List[Any]) -> List[Dict[str, Any]]:
        dicts = [r for r in records if isinstance(r, dict)]
        if len(dicts) == 1:
            return [_normalize_record(dicts[0], 0)]
        return [_normalize_record(r, i + 1) for i, r in enumerate(dicts)]

    # Case 1: plain text, one puzzle per file
    if file_path.endswith(".txt"):
        with open(file_path, "r", encoding="utf-8") as f:
            return [{"id": stem, "puzzle": f.read()}]

    # Case 2: tabular files (one row per puzzle)
    if file_path.endswith(".parquet") or file_path.endswith(".csv"):
        try:
            if file_path.endswith(".parquet"):
                df = pd.read_parquet(file_path)
            else:
                df = pd.read_csv(file_path)
        except Exception as e:
            print(f"Error reading {file_path}: {e}")
            return []
        df = df.astype(object).where(pd.notna(df), None)
        return _normalize_all(df.to_dict(orient="records"))

    # Case 3: JSON file (array or object)
    if file_path.endswith(".json"):
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                payload = json.load(f)
            if isinstance(payload, list):
                return _normalize_all(payload)
            if isinstance(payload, dict):
                return _normalize_all([payload])
            return []
        except json.JSONDecodeError:
            # Some sources use ".json" but actually store JSONL; fall back to line-delimited parsing.
            pass

    # Case 4: JSONL file
    data = []
    with open(file_path, "r", encoding="utf-8") as f:
        for line in f:
            if not line.strip():
                continue
            try:
                obj = json.loads(line)
            except json.JSONDecodeError:
                continue
            data.append(obj)
    return _normalize_all(data)
