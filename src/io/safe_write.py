#!/usr/bin/env python3
"""
Safe Write Operations with Atomic Writes and Checksums

Provides atomic file writing operations that write to temporary files first,
compute checksums, and then atomically rename to the final destination.
Used for the published JSON snapshot and the optional CSV export.
"""

import hashlib
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import pandas as pd


def compute_file_checksum(file_path: Path, algorithm: str = 'md5') -> str:
    """
    Compute checksum for a file.

    Args:
        file_path: Path to the file
        algorithm: Hash algorithm ('md5', 'sha1', 'sha256')

    Returns:
        Hexadecimal checksum string
    """
    hash_obj = hashlib.new(algorithm)

    with open(file_path, 'rb') as f:
        for chunk in iter(lambda: f.read(4096), b""):
            hash_obj.update(chunk)

    return hash_obj.hexdigest()


def _finalize(temp_path: Path, path: Path, fmt: str,
              logger: logging.Logger) -> Dict[str, Union[str, int, Path]]:
    checksum = compute_file_checksum(temp_path)
    size_bytes = temp_path.stat().st_size

    temp_path.replace(path)

    logger.info(f"Wrote {fmt.upper()}: {path} ({size_bytes:,} bytes, MD5: {checksum})")

    return {
        "path": path,
        "checksum": checksum,
        "size_bytes": size_bytes,
        "format": fmt
    }


def safe_write_json(data: Any, path: Union[str, Path],
                    logger: Optional[logging.Logger] = None) -> Dict[str, Union[str, int, Path]]:
    """
    Safely write JSON data with atomic operation and checksum.

    Args:
        data: JSON-serializable data
        path: Destination file path
        logger: Optional logger instance

    Returns:
        Dictionary with path, checksum, size and format information

    Raises:
        Exception: If write operation fails
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = path.with_suffix('.tmp')

    try:
        with open(temp_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

        return _finalize(temp_path, path, "json", logger)

    except Exception as e:
        if temp_path.exists():
            temp_path.unlink()
        logger.error(f"Failed to write JSON to {path}: {e}")
        raise


def safe_write_csv(df: pd.DataFrame, path: Union[str, Path],
                   logger: Optional[logging.Logger] = None) -> Dict[str, Union[str, int, Path]]:
    """
    Safely write DataFrame to CSV with atomic operation and checksum.

    Args:
        df: pandas DataFrame to write
        path: Destination file path
        logger: Optional logger instance

    Returns:
        Dictionary with path, checksum, size and format information

    Raises:
        Exception: If write operation fails
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = path.with_suffix('.tmp')

    try:
        df.to_csv(temp_path, index=False)
        return _finalize(temp_path, path, "csv", logger)

    except Exception as e:
        if temp_path.exists():
            temp_path.unlink()
        logger.error(f"Failed to write CSV to {path}: {e}")
        raise


def verify_file_integrity(file_path: Path, expected_checksum: str,
                          algorithm: str = 'md5') -> bool:
    """
    Verify file integrity by comparing checksums.

    Args:
        file_path: Path to the file to verify
        expected_checksum: Expected checksum value
        algorithm: Hash algorithm used

    Returns:
        True if checksums match, False otherwise
    """
    if not file_path.exists():
        return False

    actual_checksum = compute_file_checksum(file_path, algorithm)
    return actual_checksum == expected_checksum
