from __future__ import annotations

import csv
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.game_record import CellValue, Grid

"""Workbook reader: decodes spreadsheet files into plain cell grids.

The conversion pipeline only consumes ``dict[sheet_name, Grid]`` where a Grid
is a list of rows and each row a list of str / int / float / bool / None. This
module is the only place that knows about pandas.

- ``.xlsx`` / ``.xlsm`` / ``.xls``: ``pd.ExcelFile`` で全シートをヘッダ無し生読み
- ``.csv``: 1 シート扱い (シート名 = ファイル名 stem)
"""

__all__ = [
    "WorkbookReadError",
    "EXCEL_SUFFIXES",
    "read_workbook",
    "dataframe_to_grid",
]

EXCEL_SUFFIXES = {".xlsx", ".xlsm", ".xls"}


class WorkbookReadError(Exception):
    """Raised when the workbook file cannot be decoded."""


def _to_cell(val: Any) -> CellValue:
    if val is None:
        return None
    try:
        if pd.isna(val):
            return None
    except (TypeError, ValueError):  # 配列系などは NA 判定不可
        pass
    if hasattr(val, "isoformat"):
        # Timestamp / datetime / time -> ISO8601 文字列
        return val.isoformat()
    if hasattr(val, "item") and not isinstance(val, (str, bytes)):
        # numpy scalar -> Python scalar
        val = val.item()
    if isinstance(val, bool):
        return val
    if isinstance(val, float) and val.is_integer():
        return int(val)
    if isinstance(val, (str, int, float)):
        return val
    return str(val)


def _csv_width(path: Path) -> int:
    """Widest row of a CSV file (pandas sizes columns from the first line only)."""
    with path.open(newline="", encoding="utf-8-sig") as f:
        return max((len(r) for r in csv.reader(f)), default=0)


def dataframe_to_grid(df: pd.DataFrame) -> Grid:
    """Convert a header-less DataFrame to a ragged list-of-lists grid.

    Trailing empty cells of each row are dropped; rows that decode entirely
    empty become empty lists.
    """
    grid: Grid = []
    for raw in df.itertuples(index=False, name=None):
        row = [_to_cell(v) for v in raw]
        while row and row[-1] is None:
            row.pop()
        grid.append(row)
    return grid


def read_workbook(path: Path, target_sheets: Iterable[str] | None = None) -> dict[str, Grid]:
    """Read a spreadsheet file returning grids keyed by sheet name (workbook order).

    Parameters
    ----------
    path: ワークブックのパス
    target_sheets: 対象シート制限 (None なら全シート)

    Raises
    ------
    WorkbookReadError: file missing or not decodable
    """
    if not path.exists():
        raise WorkbookReadError(f"workbook not found: {path}")
    wanted = set(target_sheets) if target_sheets is not None else None
    suffix = path.suffix.lower()

    try:
        if suffix == ".csv":
            width = _csv_width(path)
            if width == 0:
                return {path.stem: []}
            # メタデータ行はヘッダ行より短い (または長い) ことがあるため列数を固定する
            df = pd.read_csv(
                path,
                header=None,
                names=list(range(width)),
                dtype=object,
                skip_blank_lines=False,
                encoding="utf-8-sig",
            )
            return {path.stem: dataframe_to_grid(df)}
        if suffix not in EXCEL_SUFFIXES:
            raise WorkbookReadError(f"unsupported file type: {path.suffix or '<none>'}")

        grids: dict[str, Grid] = {}
        with pd.ExcelFile(path) as xls:
            for name in xls.sheet_names:
                if wanted is not None and str(name) not in wanted:
                    continue
                # ヘッダ行の位置はシートごとに異なるため header=None で読む
                df = xls.parse(name, header=None)
                grids[str(name)] = dataframe_to_grid(df)
        return grids
    except WorkbookReadError:
        raise
    except Exception as e:
        raise WorkbookReadError(f"failed to read workbook {path.name}: {e}") from e
