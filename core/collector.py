"""
Parameter collector for action dispatch.

Turns the resolved node parameters into the flat request payload:
control parameters are never sent, empty values are dropped, and
everything else passes through verbatim under its declared name.
"""

import logging
from typing import Any, Dict, Iterable, Mapping, Optional

from .types import ActionDefinition

logger = logging.getLogger(__name__)

# Node parameters that select what to run rather than what to send
CONTROL_PARAMETERS = frozenset({"resource", "operation", "authentication"})


def is_empty(value: Any) -> bool:
    """
    Check whether a resolved parameter value counts as absent.

    None, the empty string, and empty collections are absent.
    Zero and False are real values.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        return len(value) == 0
    return False


def collect_parameters(
    parameters: Optional[Mapping[str, Any]],
    allowed: Optional[Iterable[str]] = None,
) -> Dict[str, Any]:
    """
    Collect the non-empty parameters of one action.

    Args:
        parameters: Resolved parameter values keyed by parameter name
        allowed: Parameter names declared by the active action; when given,
                 any other key is ignored

    Returns:
        Parameter set ready to merge into the request payload
    """
    if not parameters:
        return {}

    allowed_names = None if allowed is None else frozenset(allowed)
    collected: Dict[str, Any] = {}
    skipped = []

    for name, value in parameters.items():
        if name in CONTROL_PARAMETERS:
            continue
        if allowed_names is not None and name not in allowed_names:
            skipped.append(name)
            continue
        if is_empty(value):
            continue
        collected[name] = value

    if skipped:
        logger.debug(f"Ignored parameters not declared by the action: {skipped}")

    return collected


def collect_action_parameters(
    definition: ActionDefinition,
    parameters: Optional[Mapping[str, Any]],
) -> Dict[str, Any]:
    """
    Collect only the fields the given catalog action declares.

    A declared field the host left empty takes the action's own default.
    """
    collected = collect_parameters(parameters, allowed=definition.field_names)
    for f in definition.fields:
        if f.name not in collected and f.default is not None:
            collected[f.name] = f.default
    return collected
