"""
Module name helpers.

UI5 code refers to modules by a dotted "legacy" name (sap.m.Button), while
bundlers work with slash separated module paths (sap/m/Button.js).
"""
from typing import Optional

DEFAULT_EXTENSION = ".js"


def from_ui5_legacy_name(name: str, suffix: Optional[str] = None) -> str:
    """Convert a dotted name into a module path.

    The suffix is appended verbatim; without one the default ".js" extension
    is used. Segment characters are not validated.
    """
    return name.replace(".", "/") + (suffix or DEFAULT_EXTENSION)


def view_suffix(view_type: str) -> str:
    """Suffix of a view module, e.g. XML -> .view.xml"""
    return ".view." + view_type.lower()


def get_package_name(module_path: str) -> str:
    """Return the package part of a module path ("" for top level modules)."""
    idx = module_path.rfind("/")
    if idx < 0:
        return ""
    return module_path[:idx]


def replace_filename(module_path: str, filename: str) -> str:
    """Replace the last segment of a module path with another file name."""
    package = get_package_name(module_path)
    return f"{package}/{filename}" if package else filename
