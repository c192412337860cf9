import json
import os
import sys

import numpy as np
import pandas as pd


class FileTypeHandler:
    SUPPORTED = {".json", ".csv", ".parquet", ".xlsx"}

    def __init__(self, path: str):
        self.path = path
        _, ext = os.path.splitext(path)
        self.ext = ext.lower()

        if self.ext not in self.SUPPORTED:
            raise ValueError(
                f"Unsupported file type {self.ext or '(none)'} "
                "(use .json, .csv, .parquet, or .xlsx)"
            )

    def load(self):
        if self.ext == ".json":
            with open(self.path, "r", encoding="utf-8") as f:
                return json.load(f)
        if self.ext == ".csv":
            try:
                df = pd.read_csv(self.path)
            except pd.errors.EmptyDataError:
                return []
            return frame_to_records(df)
        if self.ext == ".parquet":
            self._ensure_parquet_engine()
            return frame_to_records(pd.read_parquet(self.path))
        return self._load_excel()

    def _load_excel(self) -> dict:
        self._ensure_excel_engine()
        sheets = pd.read_excel(self.path, sheet_name=None)
        return {
            str(name): frame_to_records(df)
            for name, df in sheets.items()
            if isinstance(df, pd.DataFrame)
        }

    def _ensure_parquet_engine(self):
        try:
            import pyarrow  # noqa: F401

            return
        except ImportError:
            pass
        print("Parquet support requires pyarrow. Install via: pip install pyarrow", file=sys.stderr)
        sys.exit(1)

    def _ensure_excel_engine(self):
        try:
            import openpyxl  # noqa: F401

            return
        except ImportError:
            pass
        print("XLSX support requires openpyxl. Install via: pip install openpyxl", file=sys.stderr)
        sys.exit(1)


def load_stream(stream):
    text = stream.read()
    if not text.strip():
        return None
    return json.loads(text)


def frame_to_records(df: pd.DataFrame) -> list[dict]:
    columns = [str(c) for c in df.columns]
    return [
        {col: to_plain(val) for col, val in zip(columns, row)}
        for row in df.itertuples(index=False, name=None)
    ]


def to_plain(val):
    """Normalise a pandas/numpy cell to None, bool, int, float or str."""
    if val is None:
        return None
    if isinstance(val, (list, dict, str)):
        return val
    if isinstance(val, np.ndarray):
        return [to_plain(v) for v in val.tolist()]
    if pd.isna(val):
        return None
    if isinstance(val, (bool, np.bool_)):
        return bool(val)
    if isinstance(val, (int, np.integer)):
        return int(val)
    if isinstance(val, (float, np.floating)):
        return float(val)
    if isinstance(val, pd.Timestamp):
        return val.isoformat()
    return str(val)
