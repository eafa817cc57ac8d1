"""
Resource lookup used by the analyzer.

A resource pool maps module paths (sap/m/library.js) to resources. Pools are
only read during analysis, so one pool can serve many concurrent analyses.
"""
import asyncio
import logging
from pathlib import Path
from typing import Dict, Mapping, Optional, Protocol, Union

from .errors import ResourceNotFoundError

logger = logging.getLogger(__name__)


class Resource(Protocol):
    """A named, readable resource."""
    name: str

    async def buffer(self) -> bytes: ...

    async def get_string(self) -> str: ...


class ResourcePool(Protocol):
    """Looks up resources by module path."""

    async def find_resource(self, name: str) -> Resource:
        """Return the resource or raise ResourceNotFoundError."""
        ...


class InMemoryResource:
    """Resource backed by an in-memory buffer."""

    def __init__(self, name: str, content: Union[str, bytes]):
        self.name = name
        self._content = content.encode("utf-8") if isinstance(content, str) else content

    async def buffer(self) -> bytes:
        return self._content

    async def get_string(self) -> str:
        return self._content.decode("utf-8")

    def __repr__(self) -> str:
        return f"InMemoryResource({self.name!r})"


class FileSystemResource:
    """Resource backed by a file, read lazily."""

    def __init__(self, name: str, path: Path):
        self.name = name
        self.path = path

    async def buffer(self) -> bytes:
        return await asyncio.to_thread(self.path.read_bytes)

    async def get_string(self) -> str:
        return (await self.buffer()).decode("utf-8")

    def __repr__(self) -> str:
        return f"FileSystemResource({self.name!r}, {str(self.path)!r})"


class InMemoryResourcePool:
    """Pool over a module path -> content mapping."""

    def __init__(self, resources: Optional[Mapping[str, Union[str, bytes]]] = None):
        self._resources: Dict[str, InMemoryResource] = {}
        for name, content in (resources or {}).items():
            self.add(name, content)

    def add(self, name: str, content: Union[str, bytes]) -> InMemoryResource:
        resource = InMemoryResource(name, content)
        self._resources[name] = resource
        return resource

    async def find_resource(self, name: str) -> InMemoryResource:
        resource = self._resources.get(name)
        if resource is None:
            raise ResourceNotFoundError(name)
        return resource


class FileSystemResourcePool:
    """Pool resolving module paths relative to a root directory."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root).resolve()

    def resolve_path(self, name: str) -> Path:
        path = (self.root / name).resolve()
        # module paths must not escape the root
        if self.root not in path.parents and path != self.root:
            raise ResourceNotFoundError(name)
        return path

    async def find_resource(self, name: str) -> FileSystemResource:
        path = self.resolve_path(name)
        if not path.is_file():
            raise ResourceNotFoundError(name)
        logger.debug(f"Found resource {name} at {path}")
        return FileSystemResource(name, path)

    def __repr__(self) -> str:
        return f"FileSystemResourcePool({str(self.root)!r})"
