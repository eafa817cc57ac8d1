"""
Analyzes UI5 components to collect dependency information.

For a Component.js the manifest.json in the same package is loaded and its
"sap.ui5" section is evaluated by the rules in rules.py. Failures for one
component are reported and swallowed so a batch of components always
completes.

ComponentAnalyzer keeps no state between calls other than the (read-only)
resource pool, so many analyses can run concurrently on one instance.
"""
import asyncio
import logging
from typing import Dict, Iterable, Optional, Sequence, Union

from .diagnostics import DiagnosticCode, DiagnosticsSink, LoggingDiagnostics
from .errors import MissingResourcePoolError
from .loader import DescriptorLoader, is_base_component
from .module_info import ModuleInfo
from .resources import Resource, ResourcePool
from .rules import DEFAULT_RULES, DependencyGraphBuilder, Rule

logger = logging.getLogger(__name__)

ComponentRef = Union[str, Resource]


def _component_name(resource: ComponentRef) -> str:
    return resource if isinstance(resource, str) else resource.name


class ComponentAnalyzer:
    """Derives the dependencies a component declares in its descriptor."""

    def __init__(
        self,
        pool: ResourcePool,
        diagnostics: Optional[DiagnosticsSink] = None,
        rules: Sequence[Rule] = DEFAULT_RULES,
    ):
        if pool is None:
            raise MissingResourcePoolError()
        self.pool = pool
        self.diagnostics = diagnostics or LoggingDiagnostics(logger)
        self.loader = DescriptorLoader(pool, self.diagnostics)
        self.builder = DependencyGraphBuilder(rules, self.diagnostics)

    async def analyze(self, resource: ComponentRef, info: ModuleInfo) -> ModuleInfo:
        """Add the descriptor dependencies of a component to info and return it."""
        name = _component_name(resource)
        if is_base_component(name):
            return info

        try:
            descriptor = await self.loader.load(name)
            if descriptor is None:
                return info
            self.builder.derive(descriptor, info, component=name)
        except Exception as e:
            self.diagnostics.error(
                DiagnosticCode.ANALYSIS_FAILED,
                {"component": name, "error": e, "exception": e},
            )
        return info

    async def analyze_all(
        self,
        resources: Iterable[ComponentRef],
        info: Optional[ModuleInfo] = None,
        max_concurrency: Optional[int] = None,
    ) -> ModuleInfo:
        """Analyze many components concurrently into one shared ModuleInfo."""
        info = info if info is not None else ModuleInfo()
        await self._gather([self.analyze(r, info) for r in resources], max_concurrency)
        return info

    async def analyze_each(
        self,
        resources: Iterable[ComponentRef],
        max_concurrency: Optional[int] = None,
    ) -> Dict[str, ModuleInfo]:
        """Analyze many components concurrently, one ModuleInfo per component."""
        results: Dict[str, ModuleInfo] = {}
        tasks = []
        for resource in resources:
            name = _component_name(resource)
            results[name] = ModuleInfo(name)
            tasks.append(self.analyze(resource, results[name]))
        await self._gather(tasks, max_concurrency)
        return results

    @staticmethod
    async def _gather(coroutines: list, max_concurrency: Optional[int]) -> None:
        if not max_concurrency or max_concurrency < 1:
            await asyncio.gather(*coroutines)
            return

        semaphore = asyncio.Semaphore(max_concurrency)

        async def bounded(coroutine):
            async with semaphore:
                return await coroutine

        await asyncio.gather(*(bounded(c) for c in coroutines))
