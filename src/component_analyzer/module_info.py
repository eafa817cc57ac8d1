"""
Dependency accumulator for a single module.
"""
import threading
from enum import Enum
from typing import Dict, Iterator, List, Optional


class DependencyStrength(str, Enum):
    """How strongly a module depends on another one."""
    REQUIRED = "required"
    CONDITIONAL = "conditional"


class ModuleInfo:
    """Collects the dependencies of one module.

    A dependency that has been added as required is never downgraded by a
    later conditional add. The same module is never stored twice.
    """

    def __init__(self, name: Optional[str] = None):
        self.name = name
        self._dependencies: Dict[str, DependencyStrength] = {}
        self._lock = threading.Lock()

    def add_dependency(self, dependency: str, conditional: bool = False) -> None:
        with self._lock:
            if conditional:
                self._dependencies.setdefault(dependency, DependencyStrength.CONDITIONAL)
            else:
                self._dependencies[dependency] = DependencyStrength.REQUIRED

    @property
    def dependencies(self) -> List[str]:
        with self._lock:
            return list(self._dependencies)

    def get_strength(self, dependency: str) -> Optional[DependencyStrength]:
        with self._lock:
            return self._dependencies.get(dependency)

    def is_conditional_dependency(self, dependency: str) -> bool:
        return self.get_strength(dependency) == DependencyStrength.CONDITIONAL

    def is_required_dependency(self, dependency: str) -> bool:
        return self.get_strength(dependency) == DependencyStrength.REQUIRED

    def to_dict(self) -> Dict[str, str]:
        """Module path -> strength, sorted by module path."""
        with self._lock:
            return {dep: self._dependencies[dep].value for dep in sorted(self._dependencies)}

    def __contains__(self, dependency: object) -> bool:
        with self._lock:
            return dependency in self._dependencies

    def __iter__(self) -> Iterator[str]:
        return iter(self.dependencies)

    def __len__(self) -> int:
        with self._lock:
            return len(self._dependencies)

    def __repr__(self) -> str:
        return f"ModuleInfo(name={self.name!r}, dependencies={len(self)})"
