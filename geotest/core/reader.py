"""Read gazetteer TSV exports into Record objects."""
import csv
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd

from geotest.core.config import HEADER_ALIASES, INT_FIELDS
from geotest.core.models import Record


class InputFileError(Exception):
    """The input file cannot be read or parsed."""


def _parse_int(value: str, column: str, line: int) -> Optional[int]:
    value = value.strip()
    if value == "":
        return None
    try:
        return int(value)
    except ValueError:
        raise InputFileError(f"line {line}: {column} must be an integer or empty, got {value!r}") from None


def read_records(path: Union[str, Path]) -> List[Record]:
    """
    Parse a tab-separated gazetteer file.
    
    The first line is the header; column names are matched case-insensitively
    against HEADER_ALIASES and unknown columns are ignored. Integer columns
    may be empty.
    
    Args:
        path: Path to the TSV file
        
    Returns:
        Records in file order
        
    Raises:
        InputFileError: if the file is missing, empty or malformed
    """
    path = Path(path)
    if not path.is_file():
        raise InputFileError(f"input file not found: {path}")
    
    try:
        df = pd.read_csv(
            path,
            sep="\t",
            dtype=str,
            keep_default_na=False,
            quoting=csv.QUOTE_NONE,
            index_col=False,
            encoding="utf-8",
        )
    except pd.errors.EmptyDataError:
        raise InputFileError(f"input file has no header line: {path}") from None
    except (pd.errors.ParserError, UnicodeDecodeError, OSError) as e:
        raise InputFileError(f"cannot parse {path}: {e}") from e
    
    return records_from_frame(df)


def records_from_frame(df: pd.DataFrame) -> List[Record]:
    """Build Records from a frame whose columns are gazetteer headers."""
    columns = {}
    for column in df.columns:
        field_name = HEADER_ALIASES.get(str(column).strip().lower())
        if field_name and field_name not in columns.values():
            columns[column] = field_name
    
    df = df[list(columns)].rename(columns=columns).fillna("")
    
    records = []
    # Header is line 1
    for line, row in enumerate(df.to_dict("records"), start=2):
        values = dict(row)
        for int_field in INT_FIELDS:
            if int_field in values:
                values[int_field] = _parse_int(values[int_field], int_field, line)
        values.setdefault("place_id", None)
        values.setdefault("name_id", None)
        records.append(Record(line=line, **values))
    
    return records
