"""Abstract base class for resource adapters, plus the attribute schema they declare."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from ..errors import ValidationError
from ..services.locks import NamedLocks

TYPE_STRING = "string"
TYPE_MAP = "map"


@dataclass(frozen=True)
class Field:
    """Metadata for one resource attribute."""

    type: str = TYPE_STRING
    required: bool = False
    computed: bool = False
    force_new: bool = False
    default: Any = None
    # maps only: every value must already be a string
    string_values: bool = False

    def default_value(self) -> Any:
        if self.default is not None:
            return copy.deepcopy(self.default)
        if self.type == TYPE_MAP and not self.computed:
            return {}
        return None


Schema = dict[str, Field]


def validate_config(schema: Schema, config: dict[str, Any]) -> dict[str, Any]:
    """Check *config* against *schema* and return it with defaults applied.

    Raises ValidationError for unknown, missing, computed or mistyped attributes.
    """
    unknown = sorted(set(config) - set(schema))
    if unknown:
        raise ValidationError(f"Unsupported attributes: {', '.join(unknown)}")

    result: dict[str, Any] = {}
    for key, field in schema.items():
        value = config.get(key)
        if field.computed:
            if value is not None:
                raise ValidationError(f"`{key}` is computed and cannot be set")
            continue
        if value is None:
            if field.required:
                raise ValidationError(f"`{key}` is required")
            result[key] = field.default_value()
            continue
        if field.type == TYPE_MAP:
            if not isinstance(value, dict):
                raise ValidationError(f"`{key}` must be a map, got {type(value).__name__}")
            if field.string_values:
                bad = sorted(str(k) for k, v in value.items() if not isinstance(v, str))
                if bad:
                    raise ValidationError(f"`{key}` values must be strings: {', '.join(bad)}")
            result[key] = dict(value)
        else:
            if not isinstance(value, str):
                raise ValidationError(f"`{key}` must be a string, got {type(value).__name__}")
            if field.required and not value:
                raise ValidationError(f"`{key}` must not be empty")
            result[key] = value
    return result


def force_new_changes(schema: Schema, old: dict[str, Any], new: dict[str, Any]) -> list[str]:
    """Return the force-new attributes whose value differs between *old* and *new*."""
    changed = []
    for key, field in schema.items():
        if not field.force_new:
            continue
        before = old.get(key, field.default_value())
        after = new.get(key, field.default_value())
        if key == "location" and before and after:
            # locations compare in normalized form
            before = before.replace(" ", "").lower()
            after = after.replace(" ", "").lower()
        if before != after:
            changed.append(key)
    return changed


class ResourceData:
    """Host-side state of one resource instance: an ID and an attribute map.

    An empty ID means the resource is absent.
    """

    def __init__(
        self,
        schema: Schema,
        attributes: dict[str, Any] | None = None,
        resource_id: str = "",
    ) -> None:
        self._schema = schema
        self._attributes: dict[str, Any] = dict(attributes or {})
        self._id = resource_id

    @property
    def id(self) -> str:
        return self._id

    def set_id(self, resource_id: str) -> None:
        self._id = resource_id

    @property
    def is_absent(self) -> bool:
        return not self._id

    def get(self, key: str) -> Any:
        if key not in self._schema:
            raise KeyError(f"Unknown attribute: {key}")
        value = self._attributes.get(key)
        if value is None:
            return self._schema[key].default_value()
        return value

    def set(self, key: str, value: Any) -> None:
        if key not in self._schema:
            raise KeyError(f"Unknown attribute: {key}")
        self._attributes[key] = value

    def to_dict(self) -> dict[str, Any]:
        """Return every schema attribute, defaults filled in."""
        return {key: self.get(key) for key in self._schema}


class ResourceAdapter(ABC):
    """Interface that every managed resource type implements.

    The host calls these four operations; each is synchronous and mutates
    the ResourceData it is given.
    """

    resource_type: str = ""
    schema: Schema = {}

    def __init__(self, clients: Any, locks: NamedLocks) -> None:
        self._clients = clients
        self._locks = locks

    def new_data(self, config: dict[str, Any] | None = None, resource_id: str = "") -> ResourceData:
        """Build ResourceData from a user configuration, validating it against the schema."""
        attributes = validate_config(self.schema, config) if config is not None else {}
        return ResourceData(self.schema, attributes, resource_id)

    @abstractmethod
    def create(self, d: ResourceData) -> None:
        """Create the remote object and populate *d* from it."""
        ...

    @abstractmethod
    def read(self, d: ResourceData) -> None:
        """Refresh *d* from the remote object; clear its ID if the object is gone."""
        ...

    @abstractmethod
    def update(self, d: ResourceData) -> None:
        """Apply *d*'s mutable attributes to the existing remote object."""
        ...

    @abstractmethod
    def delete(self, d: ResourceData) -> None:
        """Remove the remote object. Deleting an absent object succeeds."""
        ...

    def import_state(self, d: ResourceData) -> list[ResourceData]:
        """Default import: the ID alone is enough, the host follows with read()."""
        return [d]
