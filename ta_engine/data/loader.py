"""
Loads price series from local files into TimeSeries.

Supported formats:
- CSV with the timestamp as first column, a Close column and optional
  High/Low/Volume columns
- JSON list of [timestamp, price] pairs
- JSON market-chart object with "prices" and optional "total_volumes" pair lists
"""
import json
import logging
from pathlib import Path
from typing import Union

import pandas as pd

from ..shared.errors import InvalidInputError
from ..shared.types import TimeSeries

logger = logging.getLogger(__name__)


def load_csv(path: Union[str, Path]) -> TimeSeries:
    """
    Load a CSV price file.

    Args:
        path: CSV file with the timestamp index as first column

    Returns:
        TimeSeries sorted by timestamp
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    df = pd.read_csv(path, index_col=0, parse_dates=True)
    df = df.sort_index()
    if "Close" not in df.columns:
        raise InvalidInputError(f"Column 'Close' not found. Available: {list(df.columns)}")

    logger.debug(f"Loaded {len(df)} rows from {path}")
    return TimeSeries.from_series(df)


def load_json(path: Union[str, Path]) -> TimeSeries:
    """
    Load a JSON price file (pair list or market-chart object).

    Args:
        path: JSON file

    Returns:
        TimeSeries in file order
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    with open(path, 'r') as f:
        payload = json.load(f)

    if isinstance(payload, dict):
        if "prices" not in payload:
            raise InvalidInputError(
                f"JSON object needs a 'prices' key. Available: {list(payload.keys())}"
            )
        pairs = payload["prices"]
        volumes = payload.get("total_volumes")
    else:
        pairs = payload
        volumes = None

    if not isinstance(pairs, list) or any(
        not isinstance(p, (list, tuple)) or len(p) != 2 for p in pairs
    ):
        raise InvalidInputError("prices must be a list of [timestamp, price] pairs")

    logger.debug(f"Loaded {len(pairs)} samples from {path}")
    return TimeSeries.from_pairs(pairs, volumes=volumes)


def load_series(path: Union[str, Path]) -> TimeSeries:
    """Load a CSV or JSON price file, chosen by extension."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return load_csv(path)
    if suffix == ".json":
        return load_json(path)
    raise InvalidInputError(f"Unsupported data file type '{suffix}' (expected .csv or .json)")
