"""
Diagnostics emitted while analyzing components.

Every skip or failure has its own DiagnosticCode, so callers can check which
rule skipped a dependency and why without parsing log text. Sinks are passed
to the analyzer; LoggingDiagnostics writes to the standard logging module and
RecordingDiagnostics keeps the records in memory.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    VERBOSE = "verbose"
    WARN = "warn"
    ERROR = "error"


class DiagnosticCode(str, Enum):
    """Reasons for diagnostics, one per situation."""
    # loader
    MANIFEST_NOT_FOUND = "manifest_not_found"
    MANIFEST_PARSE_ERROR = "manifest_parse_error"
    # orchestrator
    ANALYSIS_FAILED = "analysis_failed"
    # graph builder
    DEPENDENCY_ADDED = "dependency_added"
    ROOT_VIEW_NAME_MISSING = "root_view_name_missing"
    COMPONENT_USAGE_NAME_MISSING = "component_usage_name_missing"
    DATA_SOURCE_NOT_FOUND = "data_source_not_found"
    UNKNOWN_ODATA_VERSION = "unknown_odata_version"
    UNKNOWN_DATA_SOURCE_TYPE = "unknown_data_source_type"
    MODEL_TYPE_UNDEFINED = "model_type_undefined"
    ROUTING_TARGET_VIEW_TYPE_MISSING = "routing_target_view_type_missing"


MESSAGES: Dict[DiagnosticCode, str] = {
    DiagnosticCode.MANIFEST_NOT_FOUND:
        "No manifest found for '{component}', skipping analysis",
    DiagnosticCode.MANIFEST_PARSE_ERROR:
        "Failed to parse manifest '{manifest}' of component '{component}' (ignored): {error}",
    DiagnosticCode.ANALYSIS_FAILED:
        "An error occurred while analyzing component '{component}' (ignored): {error}",
    DiagnosticCode.DEPENDENCY_ADDED:
        "Adding {rule} dependency '{module}' (conditional: {conditional})",
    DiagnosticCode.ROOT_VIEW_NAME_MISSING:
        "Root view is configured without a viewName",
    DiagnosticCode.COMPONENT_USAGE_NAME_MISSING:
        "Component usage '{usage}' does not define a component name",
    DiagnosticCode.DATA_SOURCE_NOT_FOUND:
        "Provided dataSource '{data_source}' for model '{model}' does not exist",
    DiagnosticCode.UNKNOWN_ODATA_VERSION:
        "Provided OData version '{odata_version}' in dataSource '{data_source}' "
        "for model '{model}' is unknown",
    DiagnosticCode.UNKNOWN_DATA_SOURCE_TYPE:
        "Unknown dataSource type '{data_source_type}' defined for model '{model}'. "
        "Please configure a 'type' in the model config",
    DiagnosticCode.MODEL_TYPE_UNDEFINED:
        "Neither a type nor a dataSource has been defined for model '{model}'",
    DiagnosticCode.ROUTING_TARGET_VIEW_TYPE_MISSING:
        "Routing target '{target}' has no viewType and the routing config defines none",
}


def format_message(code: DiagnosticCode, context: Dict[str, Any]) -> str:
    template = MESSAGES.get(code)
    if template is None:
        return code.value
    try:
        return template.format(**context)
    except KeyError:
        return f"{code.value} {context}"


@dataclass(frozen=True)
class Diagnostic:
    """A single diagnostic record."""
    severity: Severity
    code: DiagnosticCode
    context: Dict[str, Any] = field(default_factory=dict)

    @property
    def message(self) -> str:
        return format_message(self.code, self.context)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "severity": self.severity.value,
            "code": self.code.value,
            "message": self.message,
            "context": {k: str(v) for k, v in self.context.items()},
        }


class DiagnosticsSink(Protocol):
    """Receives diagnostics; sinks never change the control flow of analysis."""

    def verbose(self, code: DiagnosticCode, context: Dict[str, Any]) -> None: ...

    def warn(self, code: DiagnosticCode, context: Dict[str, Any]) -> None: ...

    def error(self, code: DiagnosticCode, context: Dict[str, Any]) -> None: ...


def emit(sink: DiagnosticsSink, diagnostic: Diagnostic) -> None:
    """Dispatch a record to the sink method matching its severity."""
    if diagnostic.severity == Severity.ERROR:
        sink.error(diagnostic.code, diagnostic.context)
    elif diagnostic.severity == Severity.WARN:
        sink.warn(diagnostic.code, diagnostic.context)
    else:
        sink.verbose(diagnostic.code, diagnostic.context)


class LoggingDiagnostics:
    """Writes diagnostics to a standard library logger."""

    def __init__(self, target: Optional[logging.Logger] = None):
        self.logger = target or logger

    def verbose(self, code: DiagnosticCode, context: Dict[str, Any]) -> None:
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(format_message(code, context))

    def warn(self, code: DiagnosticCode, context: Dict[str, Any]) -> None:
        self.logger.warning(format_message(code, context))

    def error(self, code: DiagnosticCode, context: Dict[str, Any]) -> None:
        exc_info = context.get("exception")
        self.logger.error(format_message(code, context), exc_info=exc_info)


class RecordingDiagnostics:
    """Keeps diagnostics in memory, optionally forwarding them to another sink."""

    def __init__(self, forward_to: Optional[DiagnosticsSink] = None):
        self.records: List[Diagnostic] = []
        self.forward_to = forward_to

    def _record(self, severity: Severity, code: DiagnosticCode, context: Dict[str, Any]) -> None:
        diagnostic = Diagnostic(severity, code, dict(context))
        self.records.append(diagnostic)
        if self.forward_to is not None:
            emit(self.forward_to, diagnostic)

    def verbose(self, code: DiagnosticCode, context: Dict[str, Any]) -> None:
        self._record(Severity.VERBOSE, code, context)

    def warn(self, code: DiagnosticCode, context: Dict[str, Any]) -> None:
        self._record(Severity.WARN, code, context)

    def error(self, code: DiagnosticCode, context: Dict[str, Any]) -> None:
        self._record(Severity.ERROR, code, context)

    def by_severity(self, severity: Severity) -> List[Diagnostic]:
        return [d for d in self.records if d.severity == severity]

    def by_code(self, code: DiagnosticCode) -> List[Diagnostic]:
        return [d for d in self.records if d.code == code]

    @property
    def warnings(self) -> List[Diagnostic]:
        return self.by_severity(Severity.WARN)

    @property
    def errors(self) -> List[Diagnostic]:
        return self.by_severity(Severity.ERROR)

    def clear(self) -> None:
        self.records.clear()
