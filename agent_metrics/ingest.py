"""Parse delimited interaction exports into structured records."""

import csv
import io
import re
from pathlib import Path
from typing import Any

import polars as pl
from loguru import logger

from .constants import (
    CANDIDATE_DELIMITERS,
    DEFAULT_DELIMITER,
    DELIMITER_SAMPLE_LINES,
    MAX_EXACT_NUMBER,
    TEXT_COLUMNS,
    Column,
    LogMessage,
)
from .exceptions import FileProcessingError
from .models import InteractionRecord

NUMERIC_CELL = re.compile(r"^\s*-?(\d+\.?|\.\d+|\d+\.\d+)([eE][-+]?\d+)?\s*$")
BOOLEAN_CELLS = {"true": True, "TRUE": True, "false": False, "FALSE": False}
BYTE_ORDER_MARK = "\ufeff"


def detect_delimiter(text: str) -> str:
    """Guess the field delimiter of a delimited export.

    Each candidate splits the first non-empty lines; the winner is the
    candidate with the most stable field count that also yields more fields
    per line than any earlier winner. Falls back to a comma.

    Args:
        text: Raw file content.

    Returns:
        str: The detected delimiter.
    """
    sample = [line.rstrip("\r") for line in text.split("\n") if line.strip()][
        :DELIMITER_SAMPLE_LINES
    ]
    if not sample:
        return DEFAULT_DELIMITER

    best_delimiter = DEFAULT_DELIMITER
    best_delta: int | None = None
    best_avg: float | None = None

    for delimiter in CANDIDATE_DELIMITERS:
        counts = [len(fields) for fields in csv.reader(sample, delimiter=delimiter)]
        delta = sum(abs(b - a) for a, b in zip(counts, counts[1:]))
        avg = sum(counts) / len(counts)

        if (
            (best_delta is None or delta <= best_delta)
            and (best_avg is None or avg > best_avg)
            and avg > 1.99
        ):
            best_delimiter, best_delta, best_avg = delimiter, delta, avg

    return best_delimiter


def coerce_cell(value: str | None) -> Any:
    """Type a raw cell by its content.

    Numeric text becomes a float when it lies strictly between -2**53 and
    2**53, true/false become booleans, empty cells become None and
    everything else stays text.
    """
    if value is None or value == "":
        return None
    if value in BOOLEAN_CELLS:
        return BOOLEAN_CELLS[value]
    if NUMERIC_CELL.match(value):
        number = float(value)
        if -MAX_EXACT_NUMBER < number < MAX_EXACT_NUMBER:
            return number
    return value


def _content_lines(text: str) -> list[str]:
    """Split text on line feeds, dropping blank lines outside quoted cells."""
    lines: list[str] = []
    in_quotes = False

    for line in text.split("\n"):
        line = line.removesuffix("\r")
        if not in_quotes and not line.strip():
            continue
        lines.append(line)
        if line.count('"') % 2:
            in_quotes = not in_quotes

    return lines


def _read_frame(lines: list[str], delimiter: str) -> pl.DataFrame:
    return pl.read_csv(
        io.BytesIO("\n".join(lines).encode("utf-8")),
        separator=delimiter,
        infer_schema_length=0,
        truncate_ragged_lines=True,
    )


def _typed_row(raw: dict[str, str | None]) -> dict[str, Any]:
    """Coerce the cells of a row, keeping identifier columns as text."""
    return {
        key: (value or None) if key in TEXT_COLUMNS else coerce_cell(value)
        for key, value in raw.items()
    }


def parse_records(text: str) -> list[InteractionRecord]:
    """Parse delimited text into interaction records.

    Rows without a Queue or Media Type are dropped silently. Empty or
    header-only content yields an empty list. When the content does not
    tokenize, lines with unbalanced quotes are dropped and the rest is read
    again.

    Args:
        text: Raw file content with a header row.

    Returns:
        list[InteractionRecord]: Records in file order.

    Raises:
        FileProcessingError: If the content cannot be parsed at all.
    """
    lines = _content_lines(text.lstrip(BYTE_ORDER_MARK))
    if not lines:
        return []

    delimiter = detect_delimiter("\n".join(lines))
    logger.debug(LogMessage.DETECTED_DELIMITER.format(delimiter))

    try:
        frame = _read_frame(lines, delimiter)
    except Exception as e:
        balanced = [
            line for line in lines if line.strip() and line.count('"') % 2 == 0
        ]
        if not balanced or len(balanced) == len(lines):
            raise FileProcessingError(e) from e

        malformed = len(lines) - len(balanced)
        logger.debug(LogMessage.DROPPED_MALFORMED_LINES.format(malformed))
        try:
            frame = _read_frame(balanced, delimiter)
        except Exception as retry_error:
            raise FileProcessingError(retry_error) from retry_error

    records: list[InteractionRecord] = []
    dropped = 0

    for raw in frame.iter_rows(named=True):
        row = _typed_row(raw)
        if row.get(Column.QUEUE) is None or row.get(Column.MEDIA_TYPE) is None:
            dropped += 1
            continue
        records.append(InteractionRecord.from_row(row=row))

    if dropped:
        logger.debug(LogMessage.DROPPED_ROWS.format(dropped))

    unique_agents = len({r.agent for r in records if r.agent})
    logger.info(LogMessage.LOADED_RECORDS.format(len(records), unique_agents))

    return records


def load_records(filepath: Path | str) -> list[InteractionRecord]:
    """Read an interaction export from disk and parse it.

    The whole file is buffered into memory before parsing begins.

    Args:
        filepath: Path to the delimited export.

    Returns:
        list[InteractionRecord]: Records in file order.

    Raises:
        FileProcessingError: If the file cannot be read or parsed.
    """
    filepath = Path(filepath)
    logger.info(LogMessage.LOADING_FILE.format(filepath))

    try:
        text = filepath.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileProcessingError(e) from e

    return parse_records(text)
