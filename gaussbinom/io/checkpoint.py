"""
Checkpoint — all flag index and frontier snapshot I/O goes through here.

No other module should read or write .bin files directly.

Layout under data_path:
    cache_table.bin   flag index, rows (m, n, value=True)
    GB_{t}.bin        frontier snapshot at diagonal t, rows (m, n, value=[coef bytes])

Both are parquet containers. Coefficients are arbitrary-precision ints,
stored as little-endian unsigned byte strings in a List(Binary) column.
Writes overwrite in place (no atomic rename).
"""

import re
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import polars as pl

from gaussbinom.core.frontier import FlagIndex, FrontierCache
from gaussbinom.validation.prerequisites import CheckpointError, is_complete

FLAGS_FILENAME = 'cache_table.bin'
FRONTIER_PATTERN = re.compile(r'^GB_(\d+)\.bin$')

KEY_COLUMNS = ['m', 'n']


def flags_path(data_path) -> Path:
    """Path of the flag index file."""
    return Path(data_path) / FLAGS_FILENAME


def frontier_path(data_path, t: int) -> Path:
    """Path of the frontier snapshot for diagonal t."""
    return Path(data_path) / f"GB_{t}.bin"


def encode_int(x: int) -> bytes:
    return x.to_bytes((x.bit_length() + 7) // 8, 'little')


def decode_int(b: bytes) -> int:
    return int.from_bytes(b, 'little')


def _to_frame(table: Dict[Tuple[int, int], object], dtype: pl.DataType) -> pl.DataFrame:
    keys = sorted(table)
    return pl.DataFrame(
        {
            'm': [k[0] for k in keys],
            'n': [k[1] for k in keys],
            'value': [table[k] for k in keys],
        },
        schema={'m': pl.UInt64, 'n': pl.UInt64, 'value': dtype},
    )


def _read_frame(path: Path, dtype: pl.DataType) -> pl.DataFrame:
    if not path.exists():
        raise CheckpointError(path, "file not found")

    try:
        df = pl.read_parquet(str(path))
    except Exception as e:
        raise CheckpointError(path, f"cannot parse ({e})") from e

    expected = KEY_COLUMNS + ['value']
    if df.columns != expected:
        raise CheckpointError(path, f"columns {df.columns}, expected {expected}")
    if df.schema['value'] != dtype:
        raise CheckpointError(path, f"value dtype {df.schema['value']}, expected {dtype}")
    if df['m'].null_count() or df['n'].null_count():
        raise CheckpointError(path, "null keys")

    return df


def save_table(path, table: Dict, binary: bool = False) -> Path:
    """
    Write a Key -> value mapping as (m, n, value) rows.

    Args:
        path: Target file (overwritten)
        table: Mapping of (m, n) -> bool, or (m, n) -> list of ints
        binary: True for coefficient vectors, False for the flag index

    Returns:
        Path written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if binary:
        encoded = {k: [encode_int(x) for x in v] for k, v in table.items()}
        df = _to_frame(encoded, pl.List(pl.Binary))
    else:
        df = _to_frame({k: bool(v) for k, v in table.items()}, pl.Boolean)

    df.write_parquet(str(path))
    return path


def load_table(path, binary: bool = False) -> Dict:
    """
    Read (m, n, value) rows back into a Key -> value mapping.

    Raises:
        CheckpointError: If the file is absent or malformed
    """
    path = Path(path)
    dtype = pl.List(pl.Binary) if binary else pl.Boolean
    df = _read_frame(path, dtype)

    table = {}
    for m, n, value in df.iter_rows():
        if value is None:
            raise CheckpointError(path, f"null value at ({m}, {n})")
        if binary:
            if any(b is None for b in value):
                raise CheckpointError(path, f"null coefficient at ({m}, {n})")
            table[(m, n)] = [decode_int(b) for b in value]
        else:
            if value is not True:
                raise CheckpointError(path, f"flag ({m}, {n}) is {value}, expected true")
            table[(m, n)] = value
    return table


def save_flags(data_path, flags: FlagIndex) -> Path:
    return save_table(flags_path(data_path), flags)


def load_flags(data_path) -> FlagIndex:
    return FlagIndex(load_table(flags_path(data_path)))


def save_frontier(data_path, t: int, frontier: FrontierCache) -> Path:
    return save_table(frontier_path(data_path, t), frontier, binary=True)


def load_frontier(data_path, t: int) -> FrontierCache:
    return FrontierCache(load_table(frontier_path(data_path, t), binary=True))


def list_checkpoints(data_path) -> List[int]:
    """Sorted diagonal indices that have a GB_{t}.bin snapshot."""
    p = Path(data_path)
    if not p.is_dir():
        return []
    found = []
    for f in p.iterdir():
        match = FRONTIER_PATTERN.match(f.name)
        if match and f.is_file():
            found.append(int(match.group(1)))
    return sorted(found)


def latest_checkpoint(
    data_path,
    flags: Optional[FlagIndex] = None,
    step: int = 1,
) -> Optional[int]:
    """
    Highest diagonal with a snapshot on disk.

    If flags is given, only diagonals complete in the flag index count.
    Only multiples of step count.
    """
    for t in reversed(list_checkpoints(data_path)):
        if t % step != 0:
            continue
        if flags is None or is_complete(flags, t):
            return t
    return None
