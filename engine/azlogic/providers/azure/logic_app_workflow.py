"""Logic App Workflow resource — maps configuration onto Microsoft.Logic/workflows.

The adapter only manages the workflow shell: location, parameters, tags and
the definition's schema/version. Actions and triggers are written empty on
create and are never touched afterwards, since sibling resources edit them
in place on the same remote object.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from azure.core.exceptions import AzureError, HttpResponseError, ResourceNotFoundError
from azure.mgmt.logic.models import ParameterType, Workflow, WorkflowParameter

from ...errors import RemoteError
from ..base import TYPE_MAP, Field, ResourceAdapter, ResourceData, Schema
from .definition import DEFAULT_WORKFLOW_SCHEMA, DEFAULT_WORKFLOW_VERSION, WorkflowDefinition
from .helpers import expand_tags, flatten_tags, normalize_location, parse_workflow_id

logger = logging.getLogger(__name__)

# Lock namespace shared with the action/trigger/parameter resources of a workflow.
LOGIC_APP_LOCK_NAMESPACE = "azurerm_logic_app"


def is_not_found(error: Exception) -> bool:
    if isinstance(error, ResourceNotFoundError):
        return True
    return isinstance(error, HttpResponseError) and error.status_code == 404


def expand_parameters(parameters: Optional[dict[str, Any]]) -> dict[str, WorkflowParameter]:
    """Tag every configured value as a String parameter."""
    return {
        key: WorkflowParameter(type=ParameterType.STRING, value=value)
        for key, value in (parameters or {}).items()
    }


def flatten_parameters(parameters: Optional[dict[str, Optional[WorkflowParameter]]]) -> dict[str, str]:
    """Inverse of expand_parameters; None entries are dropped.

    Parameters created outside this resource can hold objects, arrays or
    numbers; those are returned JSON-encoded.
    """
    output: dict[str, str] = {}
    for key, param in (parameters or {}).items():
        if param is None:
            continue
        value = param.value
        if isinstance(value, str):
            output[key] = value
        else:
            logger.warning("Parameter %s has non-string type %s; storing it JSON-encoded", key, type(value).__name__)
            output[key] = json.dumps(value, sort_keys=True)
    return output


class LogicAppWorkflowResource(ResourceAdapter):
    """CRUD adapter for ``azurerm_logic_app_workflow``."""

    resource_type = "azurerm_logic_app_workflow"

    schema: Schema = {
        "name": Field(required=True, force_new=True),
        "location": Field(required=True, force_new=True),
        "resource_group_name": Field(required=True, force_new=True),
        "parameters": Field(type=TYPE_MAP, string_values=True),
        "workflow_schema": Field(force_new=True, default=DEFAULT_WORKFLOW_SCHEMA),
        "workflow_version": Field(force_new=True, default=DEFAULT_WORKFLOW_VERSION),
        "tags": Field(type=TYPE_MAP),
        "access_endpoint": Field(computed=True),
    }

    @property
    def workflows(self) -> Any:
        """The ``workflows`` operation group (see AzureClients)."""
        return self._clients.workflows

    # -- CRUD ----------------------------------------------------------------

    def create(self, d: ResourceData) -> None:
        logger.info("Preparing arguments for Logic App Workflow creation.")

        name = d.get("name")
        resource_group = d.get("resource_group_name")
        location = normalize_location(d.get("location"))
        definition = WorkflowDefinition.new(d.get("workflow_schema"), d.get("workflow_version"))

        workflow = Workflow(
            location=location,
            definition=definition.to_document(),
            parameters=expand_parameters(d.get("parameters")),
            tags=expand_tags(d.get("tags")),
        )

        try:
            self.workflows.create_or_update(resource_group, name, workflow)
        except AzureError as e:
            logger.error("Creating Logic App Workflow %s failed: %s", name, e)
            raise RemoteError("creating", name, resource_group, e) from e

        try:
            read = self.workflows.get(resource_group, name)
        except AzureError as e:
            raise RemoteError("making Read request on", name, resource_group, e) from e
        if read is None or not read.id:
            raise RemoteError("reading the ID of", name, resource_group, "no ID was returned")

        d.set_id(read.id)
        logger.info("Created Logic App Workflow %s", read.id)

        self.read(d)

    def read(self, d: ResourceData) -> None:
        resource_group, name = parse_workflow_id(d.id)

        try:
            resp = self.workflows.get(resource_group, name)
        except AzureError as e:
            if is_not_found(e):
                logger.warning("Logic App Workflow %s was not found - removing from state", d.id)
                d.set_id("")
                return
            raise RemoteError("making Read request on", name, resource_group, e) from e

        d.set("name", resp.name)
        d.set("resource_group_name", resource_group)

        if resp.location is not None:
            d.set("location", normalize_location(resp.location))

        d.set("parameters", flatten_parameters(resp.parameters))
        d.set("access_endpoint", resp.access_endpoint)

        definition = WorkflowDefinition.parse(resp.definition)
        if definition is not None and definition.schema_ is not None and definition.content_version is not None:
            d.set("workflow_schema", definition.schema_)
            d.set("workflow_version", definition.content_version)

        d.set("tags", flatten_tags(resp.tags))

    def update(self, d: ResourceData) -> None:
        resource_group, name = parse_workflow_id(d.id)

        with self._locks.lock(name, LOGIC_APP_LOCK_NAMESPACE):
            try:
                existing = self.workflows.get(resource_group, name)
            except AzureError as e:
                if is_not_found(e):
                    logger.warning("Logic App Workflow %s was not found - removing from state", d.id)
                    d.set_id("")
                    return
                raise RemoteError("making Read request on", name, resource_group, e) from e

            if existing.definition is None:
                raise RemoteError("parsing", name, resource_group, "the remote workflow has no definition")

            workflow = Workflow(
                location=normalize_location(d.get("location")),
                definition=existing.definition,
                parameters=expand_parameters(d.get("parameters")),
                tags=expand_tags(d.get("tags")),
            )

            try:
                self.workflows.create_or_update(resource_group, name, workflow)
            except AzureError as e:
                logger.error("Updating Logic App Workflow %s failed: %s", name, e)
                raise RemoteError("updating", name, resource_group, e) from e

            self.read(d)

    def delete(self, d: ResourceData) -> None:
        resource_group, name = parse_workflow_id(d.id)

        with self._locks.lock(name, LOGIC_APP_LOCK_NAMESPACE):
            try:
                self.workflows.delete(resource_group, name)
            except AzureError as e:
                if is_not_found(e):
                    logger.info("Logic App Workflow %s already deleted", name)
                    return
                raise RemoteError("issuing delete request for", name, resource_group, e) from e
        logger.info("Deleted Logic App Workflow %s", name)

    # -- Extras --------------------------------------------------------------

    def import_state(self, d: ResourceData) -> list[ResourceData]:
        parse_workflow_id(d.id)
        return [d]

    def exists(self, d: ResourceData) -> bool:
        resource_group, name = parse_workflow_id(d.id)
        try:
            self.workflows.get(resource_group, name)
        except AzureError as e:
            if is_not_found(e):
                return False
            raise RemoteError("checking existence of", name, resource_group, e) from e
        return True
