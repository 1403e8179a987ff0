"""Collect per-file measurements from source trees."""

from .complexity import ComplexityResult, LizardAnalyzer
from .filters import ScanFilter, filter_by_kind, parse_patterns
from .languages import detect_language
from .pipeline import ScanPipeline, maintainability_index
from .tools import ToolProcurement

__all__ = [
    "ComplexityResult",
    "LizardAnalyzer",
    "ScanFilter",
    "ScanPipeline",
    "ToolProcurement",
    "detect_language",
    "filter_by_kind",
    "maintainability_index",
    "parse_patterns",
]
