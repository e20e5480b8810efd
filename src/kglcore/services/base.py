"""BaseService — abstract foundation for kglcore services.

Every service receives the shared :class:`Ontology` at construction time
and, optionally, a :class:`PluginManager` for extension hooks.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from kglcore.domain.ontology import Ontology
    from kglcore.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for service-layer classes.

    Usage::

        class ValidationGateway(BaseService):
            def validate_checkpoint(self, stage, modules, taxonomies) -> CheckpointResult:
                result = self._ontology.classifier.classify(...)
                ...
    """

    def __init__(self, ontology: Ontology, plugins: PluginManager | None = None) -> None:
        self._ontology = ontology
        self._plugins = plugins

    @property
    def ontology(self) -> Ontology:
        return self._ontology

    def _call_hook(
        self,
        hook_name: str,
        payload: dict[str, Any],
        warnings: list[str],
    ) -> list[Any]:
        """Call a plugin hook and return its non-None results.

        Returns an empty list if no plugin manager is attached.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        if self._plugins is None:
            return []
        hook = getattr(self._plugins.hook, hook_name)
        try:
            return list(hook(**payload))
        except Exception:
            logger.warning("Plugin hook %s failed", hook_name, exc_info=True)
            warnings.append(f"Plugin hook {hook_name} failed")
            return []
