"""
CSV export of scored hands.

Writes the header hand0,hand1,hand2,hand3,cut,score followed by one row per
(held, cut, score) record, card columns as two-character codes. Records are
consumed lazily in batches, so a capped export of the full enumeration stops
drawing from the generator as soon as the cap is reached.
"""

from __future__ import annotations

import itertools
import os
from typing import Iterable, Iterator

import pandas as pd
from tqdm import tqdm

from cribbage.engine.cards import format_card
from cribbage.solvers.enumeration import TABLE_COLUMNS, Record

DEFAULT_BATCH_SIZE: int = 100_000


def _batched(records: Iterable[Record], size: int) -> Iterator[list[Record]]:
    it = iter(records)
    while batch := list(itertools.islice(it, size)):
        yield batch


def records_to_frame(records: Iterable[Record]) -> pd.DataFrame:
    """Convert (held, cut, score) records to a DataFrame of card codes."""
    rows = [
        [format_card(c) for c in held] + [format_card(cut), points]
        for held, cut, points in records
    ]
    return pd.DataFrame(rows, columns=TABLE_COLUMNS)


def write_csv(
    path: str | os.PathLike,
    records: Iterable[Record],
    max_records: int | None = None,
    batch_size: int = DEFAULT_BATCH_SIZE,
    progress: bool = True,
    total: int | None = None,
) -> int:
    """Write records to a CSV file.

    Args:
        path:        Output file path (overwritten).
        records:     (held, cut, score) records, typically enumerate_hands().
        max_records: Stop after this many rows. None writes every record.
        batch_size:  Rows converted and written per pandas call.
        progress:    Show a tqdm progress bar.
        total:       Expected row count for the progress bar, if known.

    Returns:
        Number of data rows written (header excluded).

    Raises:
        ValueError: If max_records is negative or batch_size is not positive.
    """
    if max_records is not None:
        if max_records < 0:
            raise ValueError(f"max_records must be non-negative, got {max_records}")
        records = itertools.islice(records, max_records)
        total = max_records if total is None else min(total, max_records)
    if batch_size < 1:
        raise ValueError(f"batch_size must be at least 1, got {batch_size}")

    n_rows = 0
    with open(path, "w", newline="", encoding="utf-8") as fh, tqdm(
        total=total, unit="rows", desc="Writing", disable=not progress
    ) as bar:
        write_header = True
        for batch in _batched(records, batch_size):
            frame = records_to_frame(batch)
            frame.to_csv(fh, header=write_header, index=False, lineterminator="\n")
            write_header = False
            n_rows += len(frame)
            bar.update(len(frame))
        if write_header:
            pd.DataFrame(columns=TABLE_COLUMNS).to_csv(fh, index=False, lineterminator="\n")
    return n_rows
