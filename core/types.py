"""Core data types for the GrandCentral connector."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class FieldKind(Enum):
    """Value kinds accepted by catalog fields."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"


class SubscriptionState(Enum):
    """Persisted state of a trigger's remote webhook."""
    UNREGISTERED = "unregistered"
    REGISTERED = "registered"


# Host input types for each field kind
_HOST_TYPES = {
    FieldKind.STRING: "STRING",
    FieldKind.NUMBER: "INT",
    FieldKind.BOOLEAN: "BOOLEAN",
}


@dataclass(frozen=True)
class ActionField:
    """A single declared parameter of a GrandCentral action."""
    name: str
    kind: FieldKind = FieldKind.STRING
    default: Any = None

    def input_type(self) -> tuple:
        """Get the host input declaration for this field."""
        options: Dict[str, Any] = {}
        if self.default is not None:
            options["default"] = self.default
        elif self.kind is FieldKind.STRING:
            options["default"] = ""
        return (_HOST_TYPES[self.kind], options)


@dataclass(frozen=True)
class ActionDefinition:
    """
    One (resource, operation) variant of the action catalog.

    The operation name is the remote action identifier and is sent
    verbatim as the ``action`` field of the request body.
    """
    resource: str
    operation: str
    display_name: str
    fields: Tuple[ActionField, ...] = ()

    @property
    def key(self) -> Tuple[str, str]:
        return (self.resource, self.operation)

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def get_field(self, name: str) -> Optional[ActionField]:
        """Get a declared field by name."""
        for f in self.fields:
            if f.name == name:
                return f
        return None


@dataclass
class ExecutionItem:
    """One output unit emitted by the action or trigger node."""
    json: Any
    paired_item: int = 0

    def to_dict(self) -> dict:
        """Convert to the host's item shape."""
        return {
            "json": self.json,
            "pairedItem": {"item": self.paired_item},
        }


@dataclass
class WebhookSubscription:
    """A remote webhook registration tying an event to a callback URL."""
    id: Any
    event: str = ""
    url: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "event": self.event,
            "url": self.url,
        }

