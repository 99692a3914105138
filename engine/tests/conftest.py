"""Shared pytest fixtures."""

from __future__ import annotations

import copy
import threading
import time
from typing import Any

import pytest
from azure.core.exceptions import ResourceNotFoundError
from azure.mgmt.logic.models import Workflow, WorkflowParameter

from azlogic.providers.azure.logic_app_workflow import LogicAppWorkflowResource
from azlogic.services.locks import NamedLocks

SUBSCRIPTION_ID = "00000000-0000-0000-0000-000000000000"


def workflow_id(subscription_id: str, resource_group: str, name: str) -> str:
    return (
        f"/subscriptions/{subscription_id}/resourceGroups/{resource_group}"
        f"/providers/Microsoft.Logic/workflows/{name}"
    )


class FakeWorkflows:
    """In-memory stand-in for ``LogicManagementClient.workflows``.

    Records every call as (operation, resource group, name, thread name) and
    raises ResourceNotFoundError for missing workflows like the SDK does.
    """

    def __init__(self, delay: float = 0.0) -> None:
        self.store: dict[tuple[str, str], dict[str, Any]] = {}
        self.calls: list[tuple[str, str, str, str]] = []
        self.failures: dict[str, Exception] = {}
        self.delay = delay
        self.omit_id = False
        self.on_call = None
        self._lock = threading.Lock()

    def _record(self, op: str, resource_group_name: str, workflow_name: str) -> None:
        with self._lock:
            self.calls.append((op, resource_group_name, workflow_name, threading.current_thread().name))
        if self.on_call is not None:
            self.on_call(op, resource_group_name, workflow_name)
        if self.delay:
            time.sleep(self.delay)
        if op in self.failures:
            raise self.failures[op]

    def _build(self, key: tuple[str, str]) -> Workflow:
        data = self.store[key]
        wf = Workflow(
            location=data["location"],
            tags=dict(data["tags"]) if data["tags"] is not None else None,
            definition=copy.deepcopy(data["definition"]),
            parameters={
                k: WorkflowParameter(type=t, value=copy.deepcopy(v)) if t is not None else None
                for k, (t, v) in data["parameters"].items()
            },
        )
        if not self.omit_id:
            wf.id = workflow_id(SUBSCRIPTION_ID, key[0], key[1])
        wf.name = key[1]
        wf.access_endpoint = f"https://prod-00.westus.logic.azure.com:443/workflows/{key[1]}"
        return wf

    def seed(self, resource_group_name: str, workflow_name: str, **data: Any) -> str:
        """Insert a workflow directly, bypassing call recording."""
        self.store[(resource_group_name, workflow_name)] = {
            "location": data.get("location", "westus"),
            "tags": data.get("tags", {}),
            "definition": data.get("definition"),
            "parameters": data.get("parameters", {}),
        }
        return workflow_id(SUBSCRIPTION_ID, resource_group_name, workflow_name)

    def create_or_update(self, resource_group_name: str, workflow_name: str, workflow: Workflow) -> Workflow:
        self._record("create_or_update", resource_group_name, workflow_name)
        key = (resource_group_name, workflow_name)
        self.store[key] = {
            "location": workflow.location,
            "tags": dict(workflow.tags or {}),
            "definition": copy.deepcopy(workflow.definition),
            "parameters": {
                k: (p.type, copy.deepcopy(p.value)) for k, p in (workflow.parameters or {}).items()
            },
        }
        return self._build(key)

    def get(self, resource_group_name: str, workflow_name: str) -> Workflow:
        self._record("get", resource_group_name, workflow_name)
        key = (resource_group_name, workflow_name)
        if key not in self.store:
            raise ResourceNotFoundError(f"The Resource 'Microsoft.Logic/workflows/{workflow_name}' was not found.")
        return self._build(key)

    def delete(self, resource_group_name: str, workflow_name: str) -> None:
        self._record("delete", resource_group_name, workflow_name)
        key = (resource_group_name, workflow_name)
        if key not in self.store:
            raise ResourceNotFoundError(f"The Resource 'Microsoft.Logic/workflows/{workflow_name}' was not found.")
        del self.store[key]


class FakeClients:
    def __init__(self, workflows: FakeWorkflows) -> None:
        self.workflows = workflows


@pytest.fixture
def fake_workflows() -> FakeWorkflows:
    return FakeWorkflows()


@pytest.fixture
def locks() -> NamedLocks:
    return NamedLocks()


@pytest.fixture
def adapter(fake_workflows: FakeWorkflows, locks: NamedLocks) -> LogicAppWorkflowResource:
    return LogicAppWorkflowResource(FakeClients(fake_workflows), locks)


@pytest.fixture
def wf_config() -> dict[str, Any]:
    return {
        "name": "wf1",
        "resource_group_name": "rg1",
        "location": "westus",
        "parameters": {"p1": "v1"},
    }
