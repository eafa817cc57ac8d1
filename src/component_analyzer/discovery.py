"""
Component discovery - scans directories for Component.js files.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Set, Union

from .config import DEFAULT_IGNORE_DIRS
from .descriptor import DESCRIPTOR_FILENAME
from .loader import COMPONENT_FILENAME


@dataclass
class DiscoveredComponent:
    """A Component.js found below the scanned root."""
    path: Path
    module_name: str

    @property
    def has_descriptor(self) -> bool:
        return (self.path.parent / DESCRIPTOR_FILENAME).is_file()


@dataclass
class DiscoveryResult:
    """Result of component discovery."""
    root_path: Path
    components: List[DiscoveredComponent] = field(default_factory=list)

    @property
    def module_names(self) -> List[str]:
        return [c.module_name for c in self.components]

    @property
    def total_components(self) -> int:
        return len(self.components)


class ComponentDiscovery:
    """
    Discovers Component.js modules in a directory tree.

    Module names are the POSIX paths of the files relative to the scanned
    root, which makes the root usable as a FileSystemResourcePool.
    """

    def __init__(self, ignore_dirs: Optional[Iterable[str]] = None):
        """
        Args:
            ignore_dirs: Directory names to skip (defaults to DEFAULT_IGNORE_DIRS)
        """
        self.ignore_dirs: Set[str] = set(DEFAULT_IGNORE_DIRS if ignore_dirs is None else ignore_dirs)

    def discover(self, path: Union[str, Path]) -> DiscoveryResult:
        root = Path(path).resolve()
        if not root.exists():
            raise FileNotFoundError(f"Path does not exist: {root}")

        if not root.is_dir():
            raise NotADirectoryError(f"Path is not a directory: {root}")

        result = DiscoveryResult(root_path=root)

        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = [
                d for d in dirnames
                if d not in self.ignore_dirs and not d.startswith(".")
            ]

            if COMPONENT_FILENAME not in filenames:
                continue

            file_path = Path(dirpath) / COMPONENT_FILENAME
            result.components.append(
                DiscoveredComponent(
                    path=file_path,
                    module_name=file_path.relative_to(root).as_posix(),
                )
            )

        result.components.sort(key=lambda c: c.module_name)
        return result
