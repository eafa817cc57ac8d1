"""
Component Analyzer - derives module dependencies of UI5 components.

This package provides tools to:
1. Locate and parse the manifest.json of a Component.js
2. Derive library, component, view, model and routing dependencies from it
3. Collect them as required or conditional dependencies of the component
"""

__version__ = "0.1.0"

from .analyzer import ComponentAnalyzer
from .descriptor import AppDescriptor, parse_descriptor
from .diagnostics import (
    Diagnostic,
    DiagnosticCode,
    DiagnosticsSink,
    LoggingDiagnostics,
    RecordingDiagnostics,
    Severity,
)
from .errors import (
    ComponentAnalyzerError,
    ConfigurationError,
    DescriptorParseError,
    MissingResourcePoolError,
    ResourceNotFoundError,
)
from .loader import DescriptorLoader
from .module_info import DependencyStrength, ModuleInfo
from .module_name import from_ui5_legacy_name
from .resources import FileSystemResourcePool, InMemoryResourcePool
from .rules import DEFAULT_RULES, DependencyGraphBuilder, RuleResult

__all__ = [
    "ComponentAnalyzer",
    "AppDescriptor",
    "parse_descriptor",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticsSink",
    "LoggingDiagnostics",
    "RecordingDiagnostics",
    "Severity",
    "ComponentAnalyzerError",
    "ConfigurationError",
    "DescriptorParseError",
    "MissingResourcePoolError",
    "ResourceNotFoundError",
    "DescriptorLoader",
    "DependencyStrength",
    "ModuleInfo",
    "from_ui5_legacy_name",
    "FileSystemResourcePool",
    "InMemoryResourcePool",
    "DEFAULT_RULES",
    "DependencyGraphBuilder",
    "RuleResult",
]
