"""
Report Template Registry

Central registry for resolving document types to their template implementations.

The registry is filled once at startup, frozen, and then passed to the
services that need it. Lookups are case-insensitive and every successful
lookup produces a fresh template instance.
"""

import logging
from typing import Callable, Optional

from .template import ReportTemplate


logger = logging.getLogger(__name__)


TemplateFactory = Callable[[], ReportTemplate]


class ReportRegistry:
    """Registry for report templates"""

    def __init__(self):
        # casefolded key -> (registered name, factory)
        self._templates: dict[str, tuple[str, TemplateFactory]] = {}
        self._frozen = False

    @staticmethod
    def _normalize(document_type: Optional[str]) -> str:
        return (document_type or "").casefold()

    def register(self, document_type: str, template_factory: TemplateFactory) -> None:
        """
        Register a report template.

        Args:
            document_type: Document type handled by the template (e.g., 'Ispratnica')
            template_factory: Factory returning a new template instance

        Raises:
            ValueError: If the type is empty or already registered (case-insensitively)
            RuntimeError: If the registry has been frozen
        """
        if self._frozen:
            raise RuntimeError("Report registry is frozen; templates must be registered at startup")
        if not document_type:
            raise ValueError("Document type is required")

        key = self._normalize(document_type)
        if key in self._templates:
            raise ValueError(f"Report template '{document_type}' is already registered")
        self._templates[key] = (document_type, template_factory)

    def freeze(self) -> "ReportRegistry":
        """Prevent further registrations and return the registry"""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def resolve(self, document_type: Optional[str]) -> Optional[ReportTemplate]:
        """
        Create a template for a document type.

        Args:
            document_type: The document type to look up

        Returns:
            A new template instance, or None if the type is empty or unknown
        """
        entry = self._templates.get(self._normalize(document_type))
        if entry is None:
            logger.debug(f"No report template registered for document type '{document_type}'")
            return None
        return entry[1]()

    def is_registered(self, document_type: Optional[str]) -> bool:
        """Check if a document type is registered"""
        return self._normalize(document_type) in self._templates

    def supported_types(self) -> list[str]:
        """List all registered document types in registration order"""
        return [name for name, _ in self._templates.values()]
