"""Load and validate thread records from JSON, JSON-lines or CSV files."""

import json
import math
from pathlib import Path
from typing import Any

import pandas as pd
from loguru import logger
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from .constants import (
    ActionPendingStatus,
    ApiRecordKey,
    LogMessage,
    ResolutionStatus,
)
from .errors import RecordFileError, RecordValidationError
from .models import ThreadRecord

SUPPORTED_SUFFIXES = (".json", ".jsonl", ".csv")


class ThreadRecordPayload(BaseModel):
    """Schema a raw thread row must satisfy before it becomes a ThreadRecord."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(
        min_length=1,
        validation_alias=AliasChoices("id", "thread_id"),
    )
    topic_label: str | None = Field(
        default=None,
        validation_alias=AliasChoices("topic_label", "dominant_cluster_name"),
    )
    resolution_status: ResolutionStatus | None = None
    action_pending_status: ActionPendingStatus | None = None
    action_pending_from: str | None = None
    escalation_count: int | None = Field(default=None, ge=0)
    follow_up_required: bool | None = None
    next_action_suggestion: str | None = None

    def to_record(self) -> ThreadRecord:
        return ThreadRecord.from_dict(data=self.model_dump())


def _drop_missing(row: dict[str, Any]) -> dict[str, Any]:
    # CSV cells read by pandas come back as NaN when empty
    return {
        key: value
        for key, value in row.items()
        if not (isinstance(value, float) and math.isnan(value))
    }


def _read_rows(path: Path) -> list[Any]:
    suffix = path.suffix.lower()

    try:
        if suffix == ".csv":
            # Every column as text; the payload schema coerces counts and flags
            df = pd.read_csv(path, dtype=str, keep_default_na=True)
            return [_drop_missing(row) for row in df.to_dict(orient="records")]

        with path.open("r") as f:
            if suffix == ".jsonl":
                return [json.loads(line) for line in f if line.strip()]
            data = json.load(f)
    except (
        json.JSONDecodeError,
        pd.errors.ParserError,
        pd.errors.EmptyDataError,
        UnicodeDecodeError,
    ) as e:
        raise RecordFileError(f"Could not decode {path}: {e}") from e

    # Accept both a bare list and the API envelope {"threads": [...]}
    if isinstance(data, dict):
        data = data.get(ApiRecordKey.THREADS)
    if not isinstance(data, list):
        raise RecordFileError(
            f"{path} must contain a list of thread records or a '{ApiRecordKey.THREADS}' list"
        )
    return data


def parse_records(rows: list[Any]) -> list[ThreadRecord]:
    """Validate raw rows and convert them into ThreadRecords.

    Args:
        rows: Decoded rows, normally dictionaries.

    Returns:
        list[ThreadRecord]: One record per row, in input order.

    Raises:
        RecordValidationError: If any row fails the record schema.
    """
    records: list[ThreadRecord] = []
    for index, row in enumerate(rows):
        if not isinstance(row, dict):
            raise RecordValidationError(
                index=index, reason=f"expected an object, got {type(row).__name__}"
            )
        try:
            payload = ThreadRecordPayload.model_validate(row)
        except ValidationError as e:
            raise RecordValidationError(index=index, reason=str(e)) from e
        records.append(payload.to_record())
    return records


def load_records(path: Path | str) -> list[ThreadRecord]:
    """Load thread records from a .json, .jsonl or .csv file.

    JSON files hold either a list of thread objects or an object with a
    "threads" list. Empty CSV cells are treated as absent fields.

    Args:
        path: File to read.

    Returns:
        list[ThreadRecord]: Validated records.

    Raises:
        RecordFileError: If the file is missing, unsupported or undecodable.
        RecordValidationError: If a row fails validation.
    """
    path = Path(path)

    if not path.exists():
        raise RecordFileError(f"Record file {path} does not exist")
    if path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise RecordFileError(
            f"Unsupported record file type '{path.suffix}', expected one of {', '.join(SUPPORTED_SUFFIXES)}"
        )

    logger.info(LogMessage.LOADING_RECORDS.format(path))
    records = parse_records(_read_rows(path))
    logger.info(LogMessage.LOADED_RECORDS.format(len(records), path))

    return records
