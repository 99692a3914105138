"""Tests for the resource registry service."""

from __future__ import annotations

import pytest

from azlogic.providers.azure.logic_app_workflow import LogicAppWorkflowResource
from azlogic.providers.base import ResourceAdapter
from azlogic.services.locks import NamedLocks
from azlogic.services.registry import ResourceRegistry, default_registry

from conftest import FakeClients, FakeWorkflows


class MockAdapter(ResourceAdapter):
    """Minimal adapter for testing."""

    resource_type = "mock"

    def create(self, d):
        d.set_id("mock-1")

    def read(self, d):
        pass

    def update(self, d):
        pass

    def delete(self, d):
        d.set_id("")


def _registry() -> ResourceRegistry:
    return ResourceRegistry(clients_factory=lambda: FakeClients(FakeWorkflows()))


def test_register_and_list_types():
    reg = _registry()
    reg.register("mock", MockAdapter)
    assert reg.supported_types == ["mock"]


def test_default_registry_has_workflow():
    assert "azurerm_logic_app_workflow" in default_registry().supported_types


def test_get_adapter_caches_instance():
    reg = _registry()
    reg.register("mock", MockAdapter)
    assert reg.get_adapter("mock") is reg.get_adapter("mock")


def test_unknown_type():
    with pytest.raises(KeyError, match="No adapter registered"):
        _registry().get_adapter("azurerm_nope")


def test_adapters_share_locks_and_clients():
    locks = NamedLocks()
    reg = ResourceRegistry(clients_factory=lambda: FakeClients(FakeWorkflows()), locks=locks)
    reg.register("mock", MockAdapter)
    reg.register(LogicAppWorkflowResource.resource_type, LogicAppWorkflowResource)

    a = reg.get_adapter("mock")
    b = reg.get_adapter(LogicAppWorkflowResource.resource_type)
    assert a._locks is b._locks is locks
    assert a._clients is b._clients


def test_clear_cache():
    reg = _registry()
    reg.register("mock", MockAdapter)
    first = reg.get_adapter("mock")
    reg.clear_cache("mock")
    assert reg.get_adapter("mock") is not first

    clients = reg.clients
    reg.clear_cache()
    assert reg.clients is not clients
