"""Resource registry — maps resource type names to adapters and builds them."""

from __future__ import annotations

from typing import Any, Callable, Optional

from ..providers.base import ResourceAdapter
from .locks import NamedLocks


class ResourceRegistry:
    """Central registry mapping resource_type → adapter class and managing instances.

    Every adapter it builds shares one client container and one NamedLocks
    table, so adapters editing the same remote object serialize on it.
    """

    def __init__(
        self,
        clients_factory: Optional[Callable[[], Any]] = None,
        locks: Optional[NamedLocks] = None,
    ) -> None:
        self._adapter_classes: dict[str, type[ResourceAdapter]] = {}
        self._instances: dict[str, ResourceAdapter] = {}
        self._clients_factory = clients_factory
        self._clients: Any = None
        self.locks = locks or NamedLocks()

    # -- Registration --------------------------------------------------------

    def register(self, resource_type: str, adapter_cls: type[ResourceAdapter]) -> None:
        """Register an adapter class for a resource type."""
        self._adapter_classes[resource_type] = adapter_cls

    @property
    def supported_types(self) -> list[str]:
        return sorted(self._adapter_classes.keys())

    # -- Instance management -------------------------------------------------

    @property
    def clients(self) -> Any:
        if self._clients is None:
            if self._clients_factory is None:
                from ..providers.azure.clients import AzureClients
                self._clients_factory = AzureClients
            self._clients = self._clients_factory()
        return self._clients

    def get_adapter(self, resource_type: str) -> ResourceAdapter:
        """Get or create the adapter instance for *resource_type*."""
        if resource_type in self._instances:
            return self._instances[resource_type]

        cls = self._adapter_classes.get(resource_type)
        if cls is None:
            raise KeyError(
                f"No adapter registered for type '{resource_type}'. "
                f"Supported: {self.supported_types}"
            )

        adapter = cls(self.clients, self.locks)
        self._instances[resource_type] = adapter
        return adapter

    def clear_cache(self, resource_type: str | None = None) -> None:
        """Drop cached adapters (and the client container when clearing everything)."""
        if resource_type:
            self._instances.pop(resource_type, None)
        else:
            self._instances.clear()
            self._clients = None


def default_registry() -> ResourceRegistry:
    """Registry with every built-in resource type registered."""
    from ..providers.azure.logic_app_workflow import LogicAppWorkflowResource

    reg = ResourceRegistry()
    reg.register(LogicAppWorkflowResource.resource_type, LogicAppWorkflowResource)
    return reg
