"""
Job listing store abstraction supporting DynamoDB, SQL databases and memory.

This module provides a unified keyed-collection interface (put/get/scan/
delete/update by id), allowing the handlers to run against DynamoDB in
production, a SQL database in containers, and an in-memory dict in tests.
"""

import copy
import logging
from decimal import DecimalException
from typing import Any, Dict, Iterable, List, Optional

import boto3
from boto3.dynamodb.types import DYNAMODB_CONTEXT
from botocore.exceptions import BotoCoreError, ClientError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from app.core.exceptions import ListingNotFoundError, StoreError, ValidationError
from app.crud import listing as listing_crud
from app.schemas.listing import normalize_number
from app.services.update_builder import MutationRequest

logger = logging.getLogger(__name__)


class ListingStore:
    """Abstract base class for job listing stores"""

    def put(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Insert or replace a full record by its id and return it"""
        raise NotImplementedError

    def get(self, listing_id: str) -> Optional[Dict[str, Any]]:
        """Return the record, or None if no record has this id"""
        raise NotImplementedError

    def scan(self, fields: Iterable[str]) -> List[Dict[str, Any]]:
        """Return every record projected to `fields`"""
        raise NotImplementedError

    def delete(self, listing_id: str) -> None:
        """Remove the record if present"""
        raise NotImplementedError

    def update(self, mutation: MutationRequest) -> Dict[str, Any]:
        """
        Apply a MutationRequest to an existing record.

        Returns the assigned fields with their new values. Raises
        ListingNotFoundError when the record does not exist.
        """
        raise NotImplementedError


class MemoryStore(ListingStore):
    """In-process store backend for tests and local development"""

    def __init__(self):
        self.records: Dict[str, Dict[str, Any]] = {}

    def put(self, record: Dict[str, Any]) -> Dict[str, Any]:
        self.records[record["id"]] = copy.deepcopy(record)
        return record

    def get(self, listing_id: str) -> Optional[Dict[str, Any]]:
        record = self.records.get(listing_id)
        return copy.deepcopy(record) if record is not None else None

    def scan(self, fields: Iterable[str]) -> List[Dict[str, Any]]:
        fields = list(fields)
        return [
            {f: record[f] for f in fields if f in record}
            for record in self.records.values()
        ]

    def delete(self, listing_id: str) -> None:
        self.records.pop(listing_id, None)

    def update(self, mutation: MutationRequest) -> Dict[str, Any]:
        record = self.records.get(mutation.record_id)
        if record is None:
            raise ListingNotFoundError(mutation.record_id)
        changes = mutation.values()
        record.update(changes)
        return changes


def _to_dynamo(field: str, value: Any) -> Any:
    """
    Convert a number to the Decimal DynamoDB stores.

    boto3 rejects float, and DynamoDB numbers hold at most 38 significant
    digits with exponents between -130 and 125. Numbers outside that range
    are rejected here, before any request is sent.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return value
    try:
        return DYNAMODB_CONTEXT.create_decimal(str(value) if isinstance(value, float) else value)
    except DecimalException as e:
        raise ValidationError(
            [field], message=f"{field} is out of the range the job listing store can hold."
        ) from e


def _from_dynamo(item: Dict[str, Any]) -> Dict[str, Any]:
    return {k: normalize_number(v) for k, v in item.items()}


class DynamoDBStore(ListingStore):
    """AWS DynamoDB store backend"""

    def __init__(
        self,
        table_name: str,
        region_name: str = "us-east-1",
        endpoint_url: Optional[str] = None,
        aws_access_key_id: str = "",
        aws_secret_access_key: str = "",
        table: Any = None,
    ):
        self.table_name = table_name

        if table is None:
            resource_kwargs: Dict[str, Any] = {"region_name": region_name}
            if endpoint_url:
                resource_kwargs["endpoint_url"] = endpoint_url
            # If AWS_ACCESS_KEY_ID is not set, boto3 will use the Lambda execution role
            if aws_access_key_id and aws_secret_access_key:
                resource_kwargs["aws_access_key_id"] = aws_access_key_id
                resource_kwargs["aws_secret_access_key"] = aws_secret_access_key
            table = boto3.resource("dynamodb", **resource_kwargs).Table(table_name)

        self.table = table

    def _store_error(self, operation: str, error: Exception) -> StoreError:
        logger.error(f"DynamoDB {operation} on {self.table_name} failed: {error}")
        return StoreError()

    def put(self, record: Dict[str, Any]) -> Dict[str, Any]:
        try:
            self.table.put_item(Item={k: _to_dynamo(k, v) for k, v in record.items()})
        except (ClientError, BotoCoreError) as e:
            raise self._store_error("put_item", e) from e
        return record

    def get(self, listing_id: str) -> Optional[Dict[str, Any]]:
        try:
            response = self.table.get_item(Key={"id": listing_id})
        except (ClientError, BotoCoreError) as e:
            raise self._store_error("get_item", e) from e

        item = response.get("Item")
        return _from_dynamo(item) if item is not None else None

    def scan(self, fields: Iterable[str]) -> List[Dict[str, Any]]:
        names = {f"#f{i}": field for i, field in enumerate(fields)}
        scan_kwargs: Dict[str, Any] = {
            "ProjectionExpression": ", ".join(names),
            "ExpressionAttributeNames": names,
        }

        items: List[Dict[str, Any]] = []
        try:
            while True:
                response = self.table.scan(**scan_kwargs)
                items.extend(_from_dynamo(item) for item in response.get("Items", []))
                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    break
                scan_kwargs["ExclusiveStartKey"] = last_key
        except (ClientError, BotoCoreError) as e:
            raise self._store_error("scan", e) from e

        return items

    def delete(self, listing_id: str) -> None:
        try:
            self.table.delete_item(Key={"id": listing_id})
        except (ClientError, BotoCoreError) as e:
            raise self._store_error("delete_item", e) from e

    def update(self, mutation: MutationRequest) -> Dict[str, Any]:
        # Field names and values are bound through placeholders, never
        # interpolated into the expression text.
        names = {"#pk": "id"}
        values = {}
        clauses = []
        for i, (field, value) in enumerate(mutation):
            names[f"#n{i}"] = field
            values[f":v{i}"] = _to_dynamo(field, value)
            clauses.append(f"#n{i} = :v{i}")

        try:
            response = self.table.update_item(
                Key={"id": mutation.record_id},
                UpdateExpression="SET " + ", ".join(clauses),
                ConditionExpression="attribute_exists(#pk)",
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=values,
                ReturnValues="UPDATED_NEW",
            )
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
                logger.warning(f"Update of missing job listing {mutation.record_id}")
                raise ListingNotFoundError(mutation.record_id) from e
            raise self._store_error("update_item", e) from e
        except BotoCoreError as e:
            raise self._store_error("update_item", e) from e

        return _from_dynamo(response.get("Attributes", {}))


class SQLStore(ListingStore):
    """SQL database store backend (SQLAlchemy)"""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def put(self, record: Dict[str, Any]) -> Dict[str, Any]:
        try:
            with self.session_factory() as db:
                return listing_crud.upsert(db, record)
        except SQLAlchemyError as e:
            logger.error(f"Database upsert of {record.get('id')} failed: {e}")
            raise StoreError() from e

    def get(self, listing_id: str) -> Optional[Dict[str, Any]]:
        try:
            with self.session_factory() as db:
                listing = listing_crud.get_by_id(db, listing_id)
                return listing.to_dict() if listing else None
        except SQLAlchemyError as e:
            logger.error(f"Database read of {listing_id} failed: {e}")
            raise StoreError() from e

    def scan(self, fields: Iterable[str]) -> List[Dict[str, Any]]:
        try:
            with self.session_factory() as db:
                return listing_crud.get_all(db, fields)
        except SQLAlchemyError as e:
            logger.error(f"Database scan failed: {e}")
            raise StoreError() from e

    def delete(self, listing_id: str) -> None:
        try:
            with self.session_factory() as db:
                listing_crud.delete(db, listing_id)
        except SQLAlchemyError as e:
            logger.error(f"Database delete of {listing_id} failed: {e}")
            raise StoreError() from e

    def update(self, mutation: MutationRequest) -> Dict[str, Any]:
        try:
            with self.session_factory() as db:
                changes = listing_crud.update_fields(db, mutation.record_id, mutation)
        except SQLAlchemyError as e:
            logger.error(f"Database update of {mutation.record_id} failed: {e}")
            raise StoreError() from e

        if changes is None:
            raise ListingNotFoundError(mutation.record_id)
        return changes


def create_store(settings) -> ListingStore:
    """
    Build the store backend selected by settings.STORE_BACKEND.

    Raises:
        ValueError: unknown backend name
    """
    backend = settings.STORE_BACKEND

    if backend == "dynamodb":
        logger.info(f"Using DynamoDB table {settings.JOBLISTING_TABLE}")
        return DynamoDBStore(
            table_name=settings.JOBLISTING_TABLE,
            region_name=settings.AWS_REGION,
            endpoint_url=settings.DYNAMODB_ENDPOINT_URL,
            aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
            aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
        )

    if backend == "sql":
        from app.core.database import create_db_engine, create_session_factory, init_db

        logger.info("Using SQL database store")
        engine = create_db_engine(settings.DATABASE_URL)
        init_db(engine)
        return SQLStore(create_session_factory(engine))

    if backend == "memory":
        logger.info("Using in-memory store")
        return MemoryStore()

    raise ValueError(f"Unknown STORE_BACKEND: {backend}")
