##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
Tests for the `data_models.py` module of the `postal/` directory.
"""

import random
import re
from datetime import datetime

import pytest

from mdb.postal.data_models import INSERT_COLUMNS, PostalRecord, generate_record_id, row_to_record


ID_PATTERN = re.compile(r"^25627_\d+_[0-9a-z]{9}$")


class TestGenerateRecordId:
    """Tests for the synthesized record ids."""

    def test_format(self):
        """
        Test that ids have the form `{zipCode}_{millis}_{suffix}`.
        """
        record_id = generate_record_id("25627", now_ms=1700000000000, rng=random.Random(7))
        assert record_id.startswith("25627_1700000000000_")
        assert ID_PATTERN.match(record_id)

    def test_ids_are_unique_within_one_millisecond(self):
        """
        Test that many ids generated with the same timestamp do not collide.
        """
        ids = {generate_record_id("25627", now_ms=1700000000000) for _ in range(1000)}
        assert len(ids) == 1000


class TestPostalRecord:
    """Tests for the `PostalRecord` dataclass."""

    def test_from_dict_applies_defaults(self):
        """
        Test that missing fields default to empty strings and zero, never null.
        """
        record = PostalRecord.from_dict({"zipCode": "25627"})

        assert record.id is None
        assert record.sido == ""
        assert record.roadName == ""
        assert record.buildingMain == 0
        assert record.buildingSub == 0

    def test_from_dict_coerces_types(self):
        """
        Test that numeric zip codes become text and numeric strings become building numbers.
        """
        record = PostalRecord.from_dict({"id": 5, "zipCode": 6236, "buildingMain": "12", "unknown": "ignored"})

        assert record.id == "5"
        assert record.zipCode == "6236"
        assert record.buildingMain == 12

    @pytest.mark.parametrize(
        "data", [{"buildingMain": "twelve"}, {"buildingSub": True}, {"buildingMain": 3.7}, ["not", "a", "dict"]]
    )
    def test_from_dict_rejects_bad_input(self, data):
        """
        Test that malformed records raise `ValueError`.

        Args:
            data: A malformed record.
        """
        with pytest.raises(ValueError):
            PostalRecord.from_dict(data)

    def test_from_dict_accepts_whole_floats(self):
        """
        Test that a float building number is accepted only when it has no fraction.
        """
        assert PostalRecord.from_dict({"buildingMain": 3.0}).buildingMain == 3

    def test_with_id_keeps_existing_id(self):
        """
        Test that `with_id` only fills in missing ids.
        """
        assert PostalRecord(id="given", zipCode="25627").with_id().id == "given"
        assert ID_PATTERN.match(PostalRecord(zipCode="25627").with_id().id)

    def test_with_id_leaves_original_untouched(self):
        """
        Test that synthesizing an id returns a new record instead of changing the given one.
        """
        record = PostalRecord(zipCode="25627")

        identified = record.with_id()

        assert record.id is None
        assert identified is not record
        assert ID_PATTERN.match(identified.id)
        assert identified.zipCode == "25627"

    def test_to_row_matches_insert_columns(self):
        """
        Test that rows and column mappings follow the insert column order.
        """
        record = PostalRecord(id="a", zipCode="25627", roadName="경강로", buildingSub=2)

        row = record.to_row()
        columns = record.to_columns()

        assert len(row) == len(INSERT_COLUMNS)
        assert list(columns) == INSERT_COLUMNS
        assert row[0] == "a"
        assert columns["road_name"] == "경강로"
        assert columns["building_sub"] == 2


def test_row_to_record_normalizes_columns():
    """
    Test that rows with upper-case columns, nulls and helper columns are normalized.
    """
    row = {
        "ID": "a",
        "ZIP_CODE": "25627",
        "SIDO": None,
        "BUILDING_MAIN": "3",
        "CREATED_AT": datetime(2025, 5, 1, 8, 0, 0),
        "RNUM": 1,
    }

    record = row_to_record(row)

    assert record["id"] == "a"
    assert record["zipCode"] == "25627"
    assert record["sido"] == ""
    assert record["buildingMain"] == 3
    assert record["createdAt"] == "2025-05-01T08:00:00"
    assert "rnum" not in record and "RNUM" not in record
