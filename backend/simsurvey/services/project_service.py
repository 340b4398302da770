"""Researcher assignments per project (projectId + researcher email)."""
from __future__ import annotations

import logging
from typing import Any

from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from simsurvey import db
from simsurvey.config import settings
from simsurvey.errors import BadRequestError, ConflictError

logger = logging.getLogger(__name__)

COUNTER_KEY = {"projectId": "COUNTER", "id": "COUNTER"}


class ProjectService:
    @property
    def table(self):
        return db.table(settings.projects_table)

    def next_project_id(self) -> str:
        resp = self.table.update_item(
            Key=COUNTER_KEY,
            UpdateExpression="SET currentId = if_not_exists(currentId, :start) + :inc",
            ExpressionAttributeValues={":start": 0, ":inc": 1},
            ReturnValues="UPDATED_NEW",
        )
        return str(db.to_int(resp["Attributes"]["currentId"]))

    def list_researchers(self, project_id: str | None) -> list[dict[str, Any]]:
        if not project_id:
            raise BadRequestError("Missing projectId in path")
        resp = self.table.query(KeyConditionExpression=Key("projectId").eq(project_id))
        return [db.plain(i) for i in resp.get("Items", [])]

    def add_researcher(self, project_id: str | None, email: str | None, name: str | None = None) -> dict[str, Any]:
        """Assign a researcher; a new project id is allocated when none is given."""
        if not email:
            raise BadRequestError("Missing researcherEmail in body")
        if not project_id:
            project_id = self.next_project_id()

        item = {"projectId": project_id, "id": email, "researcherName": name or ""}
        try:
            self.table.put_item(
                Item=item,
                ConditionExpression="attribute_not_exists(projectId) AND attribute_not_exists(id)",
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise ConflictError(f"Researcher {email} already exists in project {project_id}")
            raise

        logger.info("researcher %s added to project %s", email, project_id)
        return {
            "message": f"Researcher {email} added to project {project_id}",
            "projectId": project_id,
            "researcher": item,
        }

    def remove_researcher(self, project_id: str | None, email: str | None) -> dict[str, str]:
        if not project_id:
            raise BadRequestError("Missing projectId in path")
        if not email:
            raise BadRequestError("Missing researcherId in path")
        self.table.delete_item(Key={"projectId": project_id, "id": email})
        logger.info("researcher %s removed from project %s", email, project_id)
        return {"message": f"Researcher {email} removed from project {project_id}"}


project_service = ProjectService()
