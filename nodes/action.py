"""GrandCentral node - Run one GrandCentral API action."""

import logging
import uuid
from typing import Optional

from ..core.catalog import (
    DEFAULT_RESOURCE,
    RESOURCES,
    ACTIONS,
    all_fields,
    default_operation,
    get_action,
)
from ..core.client import GrandCentralClient
from ..core.dispatcher import run_with_dispatcher
from ..core.errors import GrandCentralError
from ..core.settings import GrandCentralSettings
from ..core.types import ActionDefinition
from ..utils.helpers import run_async

logger = logging.getLogger(__name__)


class GrandCentral:
    """
    Call the GrandCentral REST API.

    The user picks a resource and one of its operations; the fields the
    operation declares are sent as the request body next to the action
    name. Empty fields are left out. Each record of the response's
    ``data`` array becomes one output item.

    Authentication:
    - api_key input, if set
    - otherwise GRANDCENTRAL_API_KEY from the environment
    """

    @classmethod
    def INPUT_TYPES(cls):
        optional = {
            "api_key": ("STRING", {
                "default": "",
                "tooltip": "GrandCentral API key (falls back to GRANDCENTRAL_API_KEY)"
            }),
        }
        for name, action_field in all_fields().items():
            optional[name] = action_field.input_type()

        operations = []
        for definition in ACTIONS.values():
            if definition.operation not in operations:
                operations.append(definition.operation)

        return {
            "required": {
                "resource": (list(RESOURCES), {"default": DEFAULT_RESOURCE}),
                "operation": (operations, {
                    "default": default_operation(DEFAULT_RESOURCE),
                    "tooltip": "Action to run; must belong to the selected resource"
                }),
            },
            "optional": optional,
        }

    RETURN_TYPES = ("GRANDCENTRAL_ITEMS",)
    RETURN_NAMES = ("items",)
    FUNCTION = "execute"
    CATEGORY = "grandcentral"
    DESCRIPTION = "Consume the GrandCentral REST API. Sends the selected action with its filled fields and outputs one item per returned record."

    @classmethod
    def IS_CHANGED(cls, **kwargs):
        """Always return a unique value to prevent caching."""
        # Remote data changes between runs
        return str(uuid.uuid4())

    def __init__(
        self,
        client: Optional[GrandCentralClient] = None,
        settings: Optional[GrandCentralSettings] = None,
    ):
        self._client = client
        self._settings = settings

    def execute(self, resource, operation, api_key="", **parameters):
        """
        Run the selected action.

        Raises:
            ValueError: If the operation does not belong to the resource
            GrandCentralError: If the request failed
        """
        definition = get_action(resource, operation)

        try:
            items = run_async(self._execute_async(definition, parameters, api_key))
        except GrandCentralError as e:
            logger.error(f"GrandCentral {resource}/{operation} failed: {e}")
            raise

        logger.info(f"GrandCentral {resource}/{operation}: {len(items)} item(s)")
        return ([item.to_dict() for item in items],)

    async def _execute_async(
        self,
        definition: ActionDefinition,
        parameters: dict,
        api_key: Optional[str] = None,
    ):
        return await run_with_dispatcher(
            lambda dispatcher: dispatcher.execute(definition, parameters),
            client=self._client,
            settings=self._settings,
            api_key=api_key,
        )
