"""Data simulation, loading and reshaping utilities for the dashboard."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import numpy as np
import pandas as pd

from .config import (
    DEFAULT_N_OBSERVATIONS,
    DEFAULT_N_SERIES,
    DEFAULT_OFFDIAG,
    SERIES_FIELD,
    X_FIELD,
    Y_FIELD,
)


class DataLoadError(Exception):
    """Raised when series data cannot be simulated, parsed or reshaped."""


@dataclass
class DataLoadResult:
    """Represents the result of loading a wide series data file."""

    wide: pd.DataFrame
    dataset: pd.DataFrame
    series: List[str]
    source_path: Path


def simulate_correlated_normal(
    n: int = DEFAULT_N_OBSERVATIONS,
    p: int = DEFAULT_N_SERIES,
    offdiag: float = DEFAULT_OFFDIAG,
    seed: Optional[int] = None,
) -> pd.DataFrame:
    """Simulate ``n`` by ``p`` multivariate normal data with shared correlation.

    The covariance matrix has ones on the diagonal and ``offdiag`` everywhere
    else. Columns are named ``V1`` .. ``Vp``.

    Args:
        n: Number of observations
        p: Number of series
        offdiag: Correlation between every pair of series, between 0 and 1
        seed: Optional seed for the random generator

    Returns:
        Wide DataFrame with one column per series
    """
    if n <= 0 or p <= 0:
        raise DataLoadError(f"n and p must be positive (got n={n}, p={p}).")
    if not 0.0 <= offdiag <= 1.0:
        raise DataLoadError(f"offdiag must be between 0 and 1 (got {offdiag}).")

    mu = np.zeros(p)
    sigma = np.diag(np.full(p, 1.0 - offdiag)) + np.full((p, p), offdiag)

    rng = np.random.default_rng(seed)
    draws = rng.multivariate_normal(mu, sigma, size=n)

    columns = [f"V{i}" for i in range(1, p + 1)]
    print(f"[Simulate] {n} observations x {p} series (offdiag={offdiag})")
    return pd.DataFrame(draws, columns=columns)


def to_long_format(wide: pd.DataFrame) -> pd.DataFrame:
    """Reshape a wide frame into the long (rowid, name, value) dataset.

    Rows are ordered by observation first, then by column order, and
    ``rowid`` starts at 1.
    """
    if wide.columns.duplicated().any():
        duplicated = list(wide.columns[wide.columns.duplicated()])
        raise DataLoadError(f"Duplicate series columns: {duplicated}")

    if wide.empty:
        return pd.DataFrame({
            X_FIELD: pd.Series(dtype="int64"),
            SERIES_FIELD: pd.Series(dtype="object"),
            Y_FIELD: pd.Series(dtype="float64"),
        })

    values = wide.to_numpy(dtype=float)
    n_rows, n_cols = values.shape
    names = [str(column) for column in wide.columns]

    return pd.DataFrame({
        X_FIELD: np.repeat(np.arange(1, n_rows + 1), n_cols),
        SERIES_FIELD: np.tile(np.array(names, dtype=object), n_rows),
        Y_FIELD: values.reshape(-1),
    })


def series_names(dataset: pd.DataFrame, series_field: str = SERIES_FIELD) -> List[str]:
    """Return unique series names in first-appearance order."""
    if dataset.empty or series_field not in dataset.columns:
        return []
    return [str(name) for name in pd.unique(dataset[series_field])]


def simulate_dataset(
    n: int = DEFAULT_N_OBSERVATIONS,
    p: int = DEFAULT_N_SERIES,
    offdiag: float = DEFAULT_OFFDIAG,
    seed: Optional[int] = None,
) -> pd.DataFrame:
    """Simulate correlated series and return them as a long dataset."""
    return to_long_format(simulate_correlated_normal(n, p, offdiag, seed))


class SeriesDataLoader:
    """Load wide CSV/TXT series files and prepare them for plotting."""

    def load(self, path: str | Path) -> DataLoadResult:
        """Load the given data file and return a structured result."""
        file_path = Path(path)
        if not file_path.exists():
            raise DataLoadError(f"File not found: {file_path}")

        delimiter = "\t" if file_path.suffix.lower() == ".txt" else ","

        try:
            df = pd.read_csv(file_path, delimiter=delimiter)
        except pd.errors.EmptyDataError as exc:
            raise DataLoadError("The selected file is empty.") from exc

        if df.empty:
            raise DataLoadError("The selected file is empty.")

        numeric_columns = self._numeric_columns(df)
        if not numeric_columns:
            raise DataLoadError("No numeric columns were detected to plot.")

        wide = df[numeric_columns].apply(pd.to_numeric, errors="coerce")
        dataset = to_long_format(wide).dropna(subset=[Y_FIELD]).reset_index(drop=True)

        print(f"[DataLoader] Loaded {file_path.name}: {len(wide)} rows, {len(numeric_columns)} series")

        return DataLoadResult(
            wide=wide,
            dataset=dataset,
            series=[str(column) for column in numeric_columns],
            source_path=file_path,
        )

    def _numeric_columns(self, df: pd.DataFrame) -> List[str]:
        numeric_columns: List[str] = []
        for column in df.columns:
            numeric_series = pd.to_numeric(df[column], errors="coerce")
            if numeric_series.notna().sum() > 0:
                numeric_columns.append(column)
        return numeric_columns
