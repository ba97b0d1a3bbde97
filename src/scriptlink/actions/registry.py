"""
Action registry for managing and discovering action types
"""

import logging
from typing import Dict, Optional, Type

from .base import BaseAction

logger = logging.getLogger(__name__)


class ActionRegistry:
    """Registry for all available action types"""

    def __init__(self):
        self._actions: Dict[str, Type[BaseAction]] = {}
        self._instances: Dict[str, BaseAction] = {}
        self._uuids: Dict[str, str] = {}

    def register(self, action_class: Type[BaseAction]) -> None:
        """Register an action class"""
        if not isinstance(action_class, type) or not issubclass(action_class, BaseAction):
            raise TypeError(f"{action_class} must inherit from BaseAction")

        action = action_class()
        if action.action_type in self._actions:
            logger.warning(f"Overwriting existing action type: {action.action_type}")

        self._actions[action.action_type] = action_class
        self._instances[action.action_type] = action
        if action.uuid:
            self._uuids[action.uuid] = action.action_type
        logger.debug(f"Registered action type: {action.action_type}")

    def get_action(self, action_type: str) -> Optional[BaseAction]:
        """Get an action instance by type or Stream Deck UUID"""
        action_type = self._uuids.get(action_type, action_type)
        return self._instances.get(action_type)

    def get_action_class(self, action_type: str) -> Optional[Type[BaseAction]]:
        action_type = self._uuids.get(action_type, action_type)
        return self._actions.get(action_type)

    def list_actions(self) -> list:
        """List all registered action types"""
        return list(self._actions.keys())

    def auto_discover(self):
        """Auto-discover and register all action modules"""
        import importlib
        import pkgutil

        import scriptlink.actions as actions_pkg

        for _importer, modname, _ispkg in pkgutil.iter_modules(actions_pkg.__path__):
            if modname in ["base", "registry", "__init__"]:
                continue

            try:
                module = importlib.import_module(f"scriptlink.actions.{modname}")
            except Exception as e:
                logger.error(f"Failed to load action module {modname}: {e}")
                continue

            for attr_name in dir(module):
                attr = getattr(module, attr_name)
                if (
                    isinstance(attr, type)
                    and issubclass(attr, BaseAction)
                    and attr is not BaseAction
                    and attr.action_type
                    and attr.action_type not in self._actions
                ):
                    self.register(attr)
                    logger.info(f"Auto-registered action: {attr.action_type}")


# Global registry instance
registry = ActionRegistry()
