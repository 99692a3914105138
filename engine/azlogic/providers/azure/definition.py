"""Workflow definition document — typed view over the free-form JSON."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_WORKFLOW_SCHEMA = (
    "https://schema.management.azure.com/providers/Microsoft.Logic/schemas/"
    "2016-06-01/workflowdefinition.json#"
)
DEFAULT_WORKFLOW_VERSION = "1.0.0.0"


class WorkflowDefinition(BaseModel):
    """The parts of a definition this resource reads or writes.

    Unknown keys (``parameters``, ``outputs``, ...) are kept as extras.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    schema_: Optional[str] = Field(default=None, alias="$schema")
    content_version: Optional[str] = Field(default=None, alias="contentVersion")
    actions: dict[str, Any] = Field(default_factory=dict)
    triggers: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def new(cls, schema: str, version: str) -> "WorkflowDefinition":
        """Create-time definition: no actions, no triggers."""
        return cls(schema_=schema, content_version=version)

    @classmethod
    def parse(cls, raw: Any) -> Optional["WorkflowDefinition"]:
        """Return a typed view of *raw*, or None when it is not a JSON object."""
        if not isinstance(raw, dict):
            return None
        data = dict(raw)
        for key in ("$schema", "contentVersion"):
            if key in data and not isinstance(data[key], str):
                data.pop(key)
        for key in ("actions", "triggers"):
            if key in data and not isinstance(data[key], dict):
                data.pop(key)
        return cls.model_validate(data)

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
