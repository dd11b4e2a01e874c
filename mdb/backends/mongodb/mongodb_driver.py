##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
MongoDB driver implementation for the MDB application.

This module defines the `MongoDBDriver` class, a concrete `BackendDriver` built on
`motor`. Records are stored as documents in the `postal_codes` collection with the
record id as `_id`, so a second insert of the same id is rejected by the server
and reported as "not inserted".
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import CollectionInvalid, DuplicateKeyError

from mdb.backends.backend_driver import BackendDriver
from mdb.common.enums import BackendKind, SchemaMode
from mdb.postal.data_models import FIELD_TO_COLUMN, INT_FIELDS, TABLE_NAME, PostalRecord


LOG = logging.getLogger(__name__)

COUNTRY_CODE = "KR"
COUNTRY_NAME = "South Korea"

COLLECTION_VALIDATOR = {
    "$jsonSchema": {
        "bsonType": "object",
        "required": ["postal_code", "country_code", "country_name"],
        "properties": {
            "postal_code": {"bsonType": "string", "description": "Postal code must be a string"},
            "country_code": {"bsonType": "string", "description": "Country code must be a string"},
            "country_name": {"bsonType": "string", "description": "Country name must be a string"},
        },
    }
}


def record_to_document(record: PostalRecord) -> Dict[str, Any]:
    """
    Build the document stored for a record.

    Args:
        record: The record to store. Its id is already set.

    Returns:
        The document, keyed by `_id`.
    """
    document = {"_id": record.id}
    document.update({attr: value for attr, value in record.to_dict().items() if attr != "id"})
    document["postal_code"] = record.zipCode
    document["country_code"] = COUNTRY_CODE
    document["country_name"] = COUNTRY_NAME
    document["createdAt"] = datetime.now(timezone.utc)
    return document


def document_to_record(document: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Normalize a stored document to the camelCase record shape.

    Args:
        document: The document read back from the collection.

    Returns:
        The record as a camelCase dictionary with a `createdAt` entry.
    """
    record = {"id": document.get("_id")}
    for attr in FIELD_TO_COLUMN:
        if attr == "id":
            continue
        value = document.get(attr)
        if attr in INT_FIELDS:
            record[attr] = int(value or 0)
        else:
            record[attr] = "" if value is None else value
    if not record["zipCode"]:
        record["zipCode"] = document.get("postal_code", "")

    created_at = document.get("createdAt")
    record["createdAt"] = created_at.isoformat() if isinstance(created_at, datetime) else created_at
    return record


class MongoDBDriver(BackendDriver):
    """
    A MongoDB-based implementation of the `BackendDriver` interface.

    Attributes:
        client (Optional[AsyncIOMotorClient]): The client, if connected.
        database (Optional[AsyncIOMotorDatabase]): The configured database, if connected.
    """

    backend_name = BackendKind.MONGODB.value
    import_schema_mode = SchemaMode.ADDITIVE
    info = {
        "type": "Document Database",
        "port": 27017,
        "features": ["Schema-less", "GridFS", "Aggregation Pipeline", "Sharding"],
    }

    def __init__(self, settings=None):
        super().__init__(settings)
        self.client: Optional[AsyncIOMotorClient] = None
        self.database: Optional[AsyncIOMotorDatabase] = None

    @property
    def is_connected(self) -> bool:
        return self.database is not None

    @property
    def collection(self):
        """The postal collection."""
        return self.database[TABLE_NAME]

    async def connect(self):
        client = AsyncIOMotorClient(
            self.setting("uri"),
            serverSelectionTimeoutMS=int(self.setting("server_selection_timeout_ms", 5000)),
        )
        try:
            # The client connects lazily, so force a round trip now
            await client.admin.command("ping")
        except Exception:
            client.close()
            raise
        self.client = client
        self.database = client[self.setting("database", "postal_codes_db")]
        LOG.info(f"MongoDB connected successfully (database '{self.database.name}')")

    async def ping(self) -> bool:
        response = await self.client.admin.command("ping")
        return bool(response.get("ok"))

    async def close(self):
        if self.client is not None:
            client, self.client, self.database = self.client, None, None
            client.close()

    async def ensure_schema(self, mode: SchemaMode):
        if mode == SchemaMode.DESTRUCTIVE:
            await self.database.drop_collection(TABLE_NAME)

        existing = await self.database.list_collection_names()
        if TABLE_NAME not in existing:
            try:
                await self.database.create_collection(TABLE_NAME, validator=COLLECTION_VALIDATOR)
            except CollectionInvalid:
                LOG.debug(f"MongoDB collection '{TABLE_NAME}' was created concurrently.")
            else:
                LOG.debug(f"MongoDB collection '{TABLE_NAME}' created.")

    async def insert_one(self, record: PostalRecord) -> bool:
        try:
            await self.collection.insert_one(record_to_document(record))
        except DuplicateKeyError:
            LOG.debug(f"MongoDB document '{record.id}' already exists; skipping.")
            return False
        return True

    async def select_page(self, limit: int, offset: int) -> List[Dict[str, Any]]:
        cursor = self.collection.find({}).sort([("createdAt", -1), ("_id", -1)]).skip(offset).limit(limit)
        documents = await cursor.to_list(length=limit)
        return [document_to_record(document) for document in documents]

    async def count(self) -> int:
        return int(await self.collection.count_documents({}))

    def __repr__(self) -> str:
        database = self.setting("database", "postal_codes_db")
        return f"<MongoDBDriver {database}>"
