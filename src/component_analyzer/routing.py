"""
Routing target view resolution.
"""
from dataclasses import dataclass
from typing import Optional

from .descriptor import RoutingDefaults, RoutingTarget


@dataclass(frozen=True)
class TargetView:
    """Effective view settings of a routing target after applying defaults.

    view_path: package of the view; target value, else routing config value.
    view_name: name of the view; target value, else routing config value.
    view_type: XML, JS, JSON, HTML, ...; target value, else routing config value.
    """
    view_path: Optional[str] = None
    view_name: Optional[str] = None
    view_type: Optional[str] = None

    @property
    def qualified_name(self) -> Optional[str]:
        """Dotted view name, prefixed with the view path when there is one."""
        if not self.view_name:
            return None
        if self.view_path:
            return f"{self.view_path}.{self.view_name}"
        return self.view_name


def _pick(override: Optional[str], default: Optional[str]) -> Optional[str]:
    return override if override is not None else default


def merge_target_config(
    defaults: Optional[RoutingDefaults],
    target: RoutingTarget,
) -> TargetView:
    """Merge a target over the routing defaults, one view field at a time.

    Only the view fields are merged; other routing config keys (routerClass,
    async, controlId, ...) never reach the effective target view.
    """
    defaults = defaults or RoutingDefaults()
    return TargetView(
        view_path=_pick(target.view_path, defaults.view_path),
        view_name=_pick(target.view_name, defaults.view_name),
        view_type=_pick(target.view_type, defaults.view_type),
    )
