##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
This module houses the dataclass that defines the format of a postal-code
record, along with the helpers that move records between the camelCase shape
used on the wire and the snake_case columns used by the relational backends.
"""

import logging
import random
import string
import time
from dataclasses import asdict, dataclass, fields, replace
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple


LOG = logging.getLogger(__name__)

TABLE_NAME = "postal_codes"
METRICS_TABLE_NAME = "performance_metrics"

ID_SUFFIX_ALPHABET = string.digits + string.ascii_lowercase
ID_SUFFIX_LENGTH = 9

# Record attribute -> column name, in insert order
FIELD_TO_COLUMN: Dict[str, str] = {
    "id": "id",
    "zipCode": "zip_code",
    "sido": "sido",
    "sigungu": "sigungu",
    "eupmyeon": "eupmyeon",
    "roadName": "road_name",
    "buildingMain": "building_main",
    "buildingSub": "building_sub",
    "fullRoadAddress": "full_road_address",
    "fullJibunAddress": "full_jibun_address",
}
COLUMN_TO_FIELD: Dict[str, str] = {column: attr for attr, column in FIELD_TO_COLUMN.items()}
INSERT_COLUMNS: List[str] = list(FIELD_TO_COLUMN.values())

INT_FIELDS = ("buildingMain", "buildingSub")


def generate_record_id(zip_code: str, now_ms: int = None, rng: random.Random = None) -> str:
    """
    Build an id of the form `{zipCode}_{currentTimeMillis}_{randomSuffix}`.

    Args:
        zip_code: The record's postal code.
        now_ms: Milliseconds since the epoch. Defaults to the current time.
        rng: The random generator to draw the suffix from. Defaults to the `random` module.

    Returns:
        The synthesized id.
    """
    now_ms = int(time.time() * 1000) if now_ms is None else now_ms
    rng = rng or random
    suffix = "".join(rng.choices(ID_SUFFIX_ALPHABET, k=ID_SUFFIX_LENGTH))
    return f"{zip_code}_{now_ms}_{suffix}"


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def _as_int(value: Any) -> int:
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise ValueError(f"Expected an integer, got boolean {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"Expected an integer, got {value!r}")
    return int(value)


@dataclass
class PostalRecord:  # pylint: disable=too-many-instance-attributes
    """
    A single postal-code record, the unit of work for every backend.

    Missing text fields default to an empty string and missing building numbers
    default to zero; nothing is ever stored as null.

    Attributes:
        zipCode: The postal code. Not validated for format.
        id: Primary key. Synthesized by `with_id` when absent.
        sido: Top-level administrative region.
        sigungu: Second-level administrative region.
        eupmyeon: Third-level administrative region.
        roadName: Road name.
        buildingMain: Main building number.
        buildingSub: Sub building number.
        fullRoadAddress: Full road-name address.
        fullJibunAddress: Full lot-number address.
    """

    # pylint: disable=invalid-name
    zipCode: str = ""
    id: Optional[str] = None
    sido: str = ""
    sigungu: str = ""
    eupmyeon: str = ""
    roadName: str = ""
    buildingMain: int = 0
    buildingSub: int = 0
    fullRoadAddress: str = ""
    fullJibunAddress: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PostalRecord":
        """
        Create a record from a camelCase dictionary, coercing types and applying defaults.
        Unknown keys are ignored.

        Args:
            data: The incoming record.

        Returns:
            A `PostalRecord` instance.

        Raises:
            ValueError: If a building number is not an integer.
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"Expected a record object, got {type(data).__name__}")

        kwargs = {}
        for field_obj in fields(cls):
            value = data.get(field_obj.name)
            if field_obj.name == "id":
                kwargs["id"] = None if value in (None, "") else str(value)
            elif field_obj.name in INT_FIELDS:
                kwargs[field_obj.name] = _as_int(value)
            else:
                kwargs[field_obj.name] = _as_text(value)
        return cls(**kwargs)

    def with_id(self) -> "PostalRecord":
        """
        Return this record with an id, synthesizing one if needed.

        Returns:
            This record when it already has an id, otherwise a copy carrying a new one.
        """
        if self.id:
            return self
        return replace(self, id=generate_record_id(self.zipCode))

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the record to its camelCase dictionary form.

        Returns:
            The record as a dictionary.
        """
        return asdict(self)

    def to_row(self) -> Tuple[Any, ...]:
        """
        The record's values in `INSERT_COLUMNS` order.

        Returns:
            A tuple of column values.
        """
        return tuple(getattr(self, attr) for attr in FIELD_TO_COLUMN)

    def to_columns(self) -> Dict[str, Any]:
        """
        The record's values keyed by column name.

        Returns:
            A dictionary of column values.
        """
        return {column: getattr(self, attr) for attr, column in FIELD_TO_COLUMN.items()}


def _isoformat(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def row_to_record(row: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Normalize a row read back from any relational backend to the camelCase shape.

    Column names are matched case-insensitively since some engines report them in
    upper case. Columns that are not part of the record (e.g. paging helpers) are dropped.

    Args:
        row: A mapping of column name to value.

    Returns:
        The record as a camelCase dictionary with a `createdAt` entry.
    """
    lowered = {str(key).lower(): value for key, value in row.items()}
    record = {attr: lowered.get(column) for column, attr in COLUMN_TO_FIELD.items()}
    for attr in FIELD_TO_COLUMN:
        if record[attr] is None and attr != "id":
            record[attr] = 0 if attr in INT_FIELDS else ""
    for attr in INT_FIELDS:
        record[attr] = int(record[attr])
    record["createdAt"] = _isoformat(lowered.get("created_at"))
    return record
