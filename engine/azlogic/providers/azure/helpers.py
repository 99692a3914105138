"""ARM helpers — resource ID parsing, location normalization, tags."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ...errors import InvalidIdentifierError, TagValidationError

MAX_TAGS = 50
MAX_TAG_KEY_LENGTH = 512
MAX_TAG_VALUE_LENGTH = 256


# ---------------------------------------------------------------------------
# Resource IDs
# ---------------------------------------------------------------------------


@dataclass
class ResourceId:
    subscription_id: str
    resource_group: str
    provider: str = ""
    path: dict[str, str] = field(default_factory=dict)


def parse_resource_id(resource_id: str) -> ResourceId:
    """Split an ARM resource ID into subscription, resource group, provider and path.

    /subscriptions/{sub}/resourceGroups/{rg}/providers/{ns}/{type}/{name}
    """
    if not resource_id or not resource_id.strip("/"):
        raise InvalidIdentifierError(f"Cannot parse Azure ID: {resource_id!r}")

    components = resource_id.strip("/").split("/")
    if len(components) % 2 != 0:
        raise InvalidIdentifierError(
            f"The number of path segments is not divisible by 2 in {resource_id!r}"
        )

    pairs: dict[str, str] = {}
    for i in range(0, len(components), 2):
        key, value = components[i], components[i + 1]
        if not key or not value:
            raise InvalidIdentifierError(f"Key/Value cannot be empty strings. Key: {key!r}, Value: {value!r}")
        pairs[key] = value

    subscription_id = pairs.pop("subscriptions", "")
    if not subscription_id:
        raise InvalidIdentifierError(f"No subscription ID found in: {resource_id!r}")

    # resourceGroups casing is inconsistent across ARM responses
    resource_group = pairs.pop("resourceGroups", "") or pairs.pop("resourcegroups", "")
    if not resource_group:
        raise InvalidIdentifierError(f"No resource group name found in: {resource_id!r}")

    provider = pairs.pop("providers", "")
    return ResourceId(
        subscription_id=subscription_id,
        resource_group=resource_group,
        provider=provider,
        path=pairs,
    )


def parse_workflow_id(resource_id: str) -> tuple[str, str]:
    """Return (resource group, workflow name) from a workflow resource ID."""
    rid = parse_resource_id(resource_id)
    name = rid.path.get("workflows", "")
    if not name:
        raise InvalidIdentifierError(f"No workflow name found in: {resource_id!r}")
    return rid.resource_group, name


# ---------------------------------------------------------------------------
# Locations
# ---------------------------------------------------------------------------


def normalize_location(location: str) -> str:
    """'West Europe' -> 'westeurope'."""
    return location.replace(" ", "").lower()


# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------


def _tag_value_to_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def validate_tags(tags: dict[str, Any]) -> None:
    if len(tags) > MAX_TAGS:
        raise TagValidationError(f"a maximum of {MAX_TAGS} tags can be applied to each ARM resource")
    for key, value in tags.items():
        if len(key) > MAX_TAG_KEY_LENGTH:
            raise TagValidationError(f"the maximum length for a tag key is {MAX_TAG_KEY_LENGTH} characters: {key!r}")
        if len(_tag_value_to_string(value)) > MAX_TAG_VALUE_LENGTH:
            raise TagValidationError(
                f"the maximum length for a tag value is {MAX_TAG_VALUE_LENGTH} characters: {key!r}"
            )


def expand_tags(tags: Optional[dict[str, Any]]) -> dict[str, str]:
    tags = tags or {}
    validate_tags(tags)
    return {k: _tag_value_to_string(v) for k, v in tags.items()}


def flatten_tags(tags: Optional[dict[str, Optional[str]]]) -> dict[str, str]:
    if not tags:
        return {}
    return {k: v for k, v in tags.items() if v is not None}
