"""
Reports package

Contains report templates for PDF generation.
"""

from core.services.reporting.registry import ReportRegistry
from .templates.default_faktura import DefaultFakturaReport
from .templates.ispratnica import IspratnicaReport


def register_all_templates(registry: ReportRegistry) -> None:
    """Register all available report templates"""
    registry.register('Ispratnica', IspratnicaReport)
    registry.register('Invoice', DefaultFakturaReport)
    registry.register('Faktura', DefaultFakturaReport)
    registry.register('DefaultFaktura', DefaultFakturaReport)


def build_registry() -> ReportRegistry:
    """Build the frozen registry used by the export services"""
    registry = ReportRegistry()
    register_all_templates(registry)
    return registry.freeze()
