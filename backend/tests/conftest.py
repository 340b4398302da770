import os

# Fake credentials so boto3 never reaches real AWS
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("AWS_SECURITY_TOKEN", "testing")
os.environ.setdefault("AWS_SESSION_TOKEN", "testing")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-2")

import pytest
from fastapi.testclient import TestClient
from moto import mock_aws

from simsurvey import db
from simsurvey.models import GroupConfig
from simsurvey.services import catalog_service, group_service


@pytest.fixture
def aws():
    """Fresh mocked DynamoDB/SNS with all tables created."""
    with mock_aws():
        db.reset_clients()
        catalog_service.clear()
        db.create_tables()
        yield
    db.reset_clients()
    catalog_service.clear()


@pytest.fixture
def client(aws):
    from simsurvey.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_group(aws):
    """Save a group through the service; returns its id."""

    def _make(questions, group_id=None, **style):
        config = GroupConfig(questions=questions, **style)
        return group_service.save(group_id, config)["groupId"]

    return _make
