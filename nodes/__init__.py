"""Host nodes for the GrandCentral connector."""

from .action import GrandCentral
from .trigger import GrandCentralTrigger

__all__ = [
    "GrandCentral",
    "GrandCentralTrigger",
]
