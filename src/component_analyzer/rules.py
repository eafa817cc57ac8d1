"""
Dependency derivation rules for application descriptors.

Each rule is a pure function that looks at a parsed descriptor and returns
the dependencies it implies together with diagnostics for everything it had
to skip. DependencyGraphBuilder runs the rules in order and folds their
results into a ModuleInfo.

The rules mirror how the UI5 runtime consumes the descriptor:

- rootView: the view created by UIComponent#createContent
- dependencies/libs and dependencies/components: loaded before the component;
  lazy entries become conditional dependencies
- componentUsages: reused components, lazy unless declared otherwise
- models: the model class, either configured directly or derived from the
  dataSource the model refers to (see Component._createManifestModelConfigurations)
- routing: the router (or targets/views handling) plus one view per target
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from .descriptor import AppDescriptor, DependencyDeclaration, RootView
from .diagnostics import (
    Diagnostic,
    DiagnosticCode,
    DiagnosticsSink,
    LoggingDiagnostics,
    Severity,
    emit,
)
from .module_info import ModuleInfo
from .module_name import from_ui5_legacy_name, view_suffix
from .routing import merge_target_config

logger = logging.getLogger(__name__)

DEFAULT_VIEW_TYPE = "XML"
LIBRARY_SUFFIX = "/library.js"
COMPONENT_SUFFIX = "/Component.js"

DEFAULT_DATA_SOURCE_TYPE = "OData"
ODATA_V2_MODEL = "sap.ui.model.odata.v2.ODataModel"
ODATA_V4_MODEL = "sap.ui.model.odata.v4.ODataModel"
JSON_MODEL = "sap.ui.model.json.JSONModel"
XML_MODEL = "sap.ui.model.xml.XMLModel"

DEFAULT_ROUTER_CLASS = "sap.ui.core.routing.Router"
DEFAULT_TARGETS_MODULE = "sap/ui/core/routing/Targets.js"
VIEWS_MODULE = "sap/ui/core/routing/Views.js"


@dataclass(frozen=True)
class DerivedDependency:
    module: str
    conditional: bool = False


@dataclass
class RuleResult:
    """Output of one rule: dependencies plus diagnostics for skipped entries."""
    rule: str
    dependencies: List[DerivedDependency] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def add(self, module: str, conditional: bool = False) -> None:
        self.dependencies.append(DerivedDependency(module, bool(conditional)))

    def warn(self, code: DiagnosticCode, **context: Any) -> None:
        self.diagnostics.append(Diagnostic(Severity.WARN, code, {"rule": self.rule, **context}))

    @property
    def modules(self) -> List[str]:
        return [d.module for d in self.dependencies]


Rule = Callable[[AppDescriptor], RuleResult]


def root_view_rule(descriptor: AppDescriptor) -> RuleResult:
    result = RuleResult("root view")
    root_view = descriptor.sap_ui5.root_view
    if not root_view:
        return result

    if isinstance(root_view, str):
        # string form is short for an XML view
        root_view = RootView(viewName=root_view, type=DEFAULT_VIEW_TYPE)

    if not root_view.view_name:
        result.warn(DiagnosticCode.ROOT_VIEW_NAME_MISSING)
        return result

    view_type = root_view.type or DEFAULT_VIEW_TYPE
    result.add(from_ui5_legacy_name(root_view.view_name, view_suffix(view_type)))
    return result


def _declared_dependencies(
    rule: str,
    declarations: Optional[Dict[str, Optional[DependencyDeclaration]]],
    suffix: str,
) -> RuleResult:
    result = RuleResult(rule)
    for name, options in (declarations or {}).items():
        lazy = bool(options and options.lazy)
        result.add(from_ui5_legacy_name(name, suffix), conditional=lazy)
    return result


def library_rule(descriptor: AppDescriptor) -> RuleResult:
    dependencies = descriptor.sap_ui5.dependencies
    return _declared_dependencies("library", dependencies and dependencies.libs, LIBRARY_SUFFIX)


def component_rule(descriptor: AppDescriptor) -> RuleResult:
    dependencies = descriptor.sap_ui5.dependencies
    return _declared_dependencies(
        "component", dependencies and dependencies.components, COMPONENT_SUFFIX
    )


def component_usage_rule(descriptor: AppDescriptor) -> RuleResult:
    result = RuleResult("component usage")
    for usage_name, usage in (descriptor.sap_ui5.component_usages or {}).items():
        if not usage or not usage.name:
            result.warn(DiagnosticCode.COMPONENT_USAGE_NAME_MISSING, usage=usage_name)
            continue
        result.add(
            from_ui5_legacy_name(usage.name, COMPONENT_SUFFIX),
            conditional=usage.lazy is not False,
        )
    return result


def infer_model_type(
    descriptor: AppDescriptor,
    model: str,
    result: RuleResult,
) -> Optional[str]:
    """Return the model class configured or implied for a model, or None.

    Every None return has added a warning to the result.
    """
    options = (descriptor.sap_ui5.models or {}).get(model)
    if options and options.type:
        return options.type

    if not options or not options.data_source:
        result.warn(DiagnosticCode.MODEL_TYPE_UNDEFINED, model=model)
        return None

    data_source_name = options.data_source
    data_source = descriptor.get_data_source(data_source_name)
    if data_source is None:
        result.warn(DiagnosticCode.DATA_SOURCE_NOT_FOUND, data_source=data_source_name, model=model)
        return None

    data_source_type = data_source.type or DEFAULT_DATA_SOURCE_TYPE
    if data_source_type == "OData":
        odata_version = data_source.settings and data_source.settings.odata_version
        if odata_version == "4.0":
            return ODATA_V4_MODEL
        if not odata_version or odata_version == "2.0":
            return ODATA_V2_MODEL
        result.warn(
            DiagnosticCode.UNKNOWN_ODATA_VERSION,
            odata_version=odata_version,
            data_source=data_source_name,
            model=model,
        )
        return None
    if data_source_type == "JSON":
        return JSON_MODEL
    if data_source_type == "XML":
        return XML_MODEL

    # custom dataSource types need a "type" in the model config
    result.warn(
        DiagnosticCode.UNKNOWN_DATA_SOURCE_TYPE,
        data_source_type=data_source_type,
        model=model,
    )
    return None


def model_rule(descriptor: AppDescriptor) -> RuleResult:
    result = RuleResult("model")
    for model in descriptor.sap_ui5.models or {}:
        model_type = infer_model_type(descriptor, model, result)
        if model_type:
            result.add(from_ui5_legacy_name(model_type))
    return result


def _class_module(name: str) -> str:
    # targetsClass may already be given as a module path
    if "/" in name:
        return name
    return from_ui5_legacy_name(name)


def routing_rule(descriptor: AppDescriptor) -> RuleResult:
    result = RuleResult("routing")
    routing = descriptor.sap_ui5.routing
    if routing is None:
        return result

    defaults = routing.config
    if routing.routes is not None:
        router_class = (defaults and defaults.router_class) or DEFAULT_ROUTER_CLASS
        result.add(from_ui5_legacy_name(router_class))
    elif routing.targets is not None:
        targets_class = defaults and defaults.targets_class
        result.add(_class_module(targets_class) if targets_class else DEFAULT_TARGETS_MODULE)
        result.add(VIEWS_MODULE)

    for target_name, target in (routing.targets or {}).items():
        if target is None or not target.view_name:
            continue
        view = merge_target_config(defaults, target)
        if not view.view_type:
            result.warn(DiagnosticCode.ROUTING_TARGET_VIEW_TYPE_MISSING, target=target_name)
            continue
        # TODO: targets only reachable through some route patterns could be conditional
        result.add(from_ui5_legacy_name(view.qualified_name, view_suffix(view.view_type)))
    return result


DEFAULT_RULES: Sequence[Rule] = (
    root_view_rule,
    library_rule,
    component_rule,
    component_usage_rule,
    model_rule,
    routing_rule,
)


def derive_dependencies(descriptor: AppDescriptor, rules: Sequence[Rule] = DEFAULT_RULES) -> List[RuleResult]:
    """Run all rules against a descriptor without touching any accumulator."""
    return [rule(descriptor) for rule in rules]


class DependencyGraphBuilder:
    """Folds the output of the derivation rules into a ModuleInfo."""

    def __init__(
        self,
        rules: Sequence[Rule] = DEFAULT_RULES,
        diagnostics: Optional[DiagnosticsSink] = None,
    ):
        self.rules = tuple(rules)
        self.diagnostics = diagnostics or LoggingDiagnostics(logger)

    def derive(
        self,
        descriptor: AppDescriptor,
        info: ModuleInfo,
        component: Optional[str] = None,
    ) -> ModuleInfo:
        for result in derive_dependencies(descriptor, self.rules):
            for dependency in result.dependencies:
                self.diagnostics.verbose(
                    DiagnosticCode.DEPENDENCY_ADDED,
                    {
                        "component": component,
                        "rule": result.rule,
                        "module": dependency.module,
                        "conditional": dependency.conditional,
                    },
                )
                info.add_dependency(dependency.module, dependency.conditional)
            for diagnostic in result.diagnostics:
                if component is not None:
                    diagnostic = Diagnostic(
                        diagnostic.severity,
                        diagnostic.code,
                        {"component": component, **diagnostic.context},
                    )
                emit(self.diagnostics, diagnostic)
        return info
