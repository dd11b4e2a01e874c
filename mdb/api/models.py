##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""Pydantic models for the request bodies accepted by the API."""

from typing import Any, List

from pydantic import BaseModel, Field


INSERT_EXAMPLE = {
    "database": "mysql",
    "data": [{"zipCode": "25627", "sido": "강원특별자치도", "sigungu": "강릉시"}],
}


class InsertRequest(BaseModel):
    """
    Body of `POST /api/postal/insert`.

    The items of `data` are validated one at a time by the importer so that a
    malformed record only fails itself, not the whole request.

    Attributes:
        database: The backend tag to insert into.
        data: The records to insert, as camelCase objects.
    """

    database: str = Field(min_length=1)
    data: List[Any]

    model_config = {"json_schema_extra": {"examples": [INSERT_EXAMPLE]}}
