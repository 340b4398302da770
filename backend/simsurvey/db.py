"""DynamoDB access and table provisioning."""
from __future__ import annotations

import logging
from decimal import Decimal
from functools import lru_cache
from typing import Any

import boto3

from simsurvey.config import settings

logger = logging.getLogger(__name__)

# (table name attribute on settings, key schema as [(attribute, key type)])
TABLE_SCHEMAS: dict[str, list[tuple[str, str]]] = {
    "groups_table": [("groupId", "HASH")],
    "responses_table": [("questionId", "HASH")],
    "survey_status_table": [("surveyId", "HASH")],
    "survey_counter_table": [("totalSurveys", "HASH")],
    "projects_table": [("projectId", "HASH"), ("id", "RANGE")],
    "questions_table": [("surveyId", "HASH"), ("questionId", "RANGE")],
}


@lru_cache(maxsize=1)
def get_dynamodb():
    """Shared boto3 DynamoDB resource."""
    return boto3.resource(
        "dynamodb",
        region_name=settings.aws_region,
        endpoint_url=settings.dynamodb_endpoint_url,
    )


@lru_cache(maxsize=1)
def get_sns():
    return boto3.client("sns", region_name=settings.aws_region)


def reset_clients() -> None:
    """Drop cached clients (settings changed, or a new mock backend in tests)."""
    get_dynamodb.cache_clear()
    get_sns.cache_clear()


def table(name: str):
    return get_dynamodb().Table(name)


def to_int(value: Any, default: int = 0) -> int:
    """DynamoDB numbers come back as Decimal."""
    if value is None:
        return default
    return int(value)


def plain(value: Any) -> Any:
    """Recursively turn Decimal into int/float so items serialize as JSON."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {k: plain(v) for k, v in value.items()}
    if isinstance(value, (list, set)):
        return [plain(v) for v in value]
    return value


def create_tables() -> list[str]:
    """Create any missing tables. Returns the names that were created."""
    dynamodb = get_dynamodb()
    existing = {t.name for t in dynamodb.tables.all()}
    created = []
    for attr, key_schema in TABLE_SCHEMAS.items():
        name = getattr(settings, attr)
        if name in existing:
            continue
        dynamodb.create_table(
            TableName=name,
            KeySchema=[{"AttributeName": a, "KeyType": k} for a, k in key_schema],
            AttributeDefinitions=[{"AttributeName": a, "AttributeType": "S"} for a, _ in key_schema],
            BillingMode="PAY_PER_REQUEST",
        )
        logger.info("created table %s", name)
        created.append(name)
    for name in created:
        dynamodb.Table(name).wait_until_exists()
    return created
