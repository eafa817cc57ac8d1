"""
Descriptor loading for components.
"""
import logging
from typing import Optional

from .descriptor import DESCRIPTOR_FILENAME, AppDescriptor, parse_descriptor
from .diagnostics import DiagnosticCode, DiagnosticsSink, LoggingDiagnostics
from .errors import DescriptorParseError, ResourceNotFoundError
from .module_name import replace_filename
from .resources import ResourcePool

logger = logging.getLogger(__name__)

COMPONENT_FILENAME = "Component.js"
BASE_COMPONENT = "sap/ui/core/Component.js"


def is_base_component(component_name: str) -> bool:
    """The framework's own Component base class has no descriptor."""
    return component_name == BASE_COMPONENT


def descriptor_name_for(component_name: str) -> str:
    """sap/m/demo/Component.js -> sap/m/demo/manifest.json"""
    return replace_filename(component_name, DESCRIPTOR_FILENAME)


class DescriptorLoader:
    """Finds and parses the manifest.json next to a Component.js.

    A missing descriptor is a normal outcome and a malformed one is reported;
    neither raises.
    """

    def __init__(self, pool: ResourcePool, diagnostics: Optional[DiagnosticsSink] = None):
        self.pool = pool
        self.diagnostics = diagnostics or LoggingDiagnostics(logger)

    async def load(self, component_name: str) -> Optional[AppDescriptor]:
        if is_base_component(component_name):
            return None

        descriptor_name = descriptor_name_for(component_name)
        try:
            resource = await self.pool.find_resource(descriptor_name)
        except ResourceNotFoundError:
            self.diagnostics.verbose(
                DiagnosticCode.MANIFEST_NOT_FOUND,
                {"component": component_name, "manifest": descriptor_name},
            )
            return None

        content = await resource.buffer()
        try:
            return parse_descriptor(descriptor_name, content)
        except DescriptorParseError as e:
            self.diagnostics.error(
                DiagnosticCode.MANIFEST_PARSE_ERROR,
                {"component": component_name, "manifest": descriptor_name, "error": e.cause},
            )
            return None
