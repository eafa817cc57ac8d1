"""
Data models for the application descriptor (manifest.json).

Only the parts of the "sap.app" and "sap.ui5" sections that influence module
dependencies are modelled. Unknown fields are ignored and every section is
optional.
"""
import json
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import DescriptorParseError

DESCRIPTOR_FILENAME = "manifest.json"


class DescriptorModel(BaseModel):
    """Base for all descriptor sections: read-only, lenient about extra keys."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class DataSourceSettings(DescriptorModel):
    # left untyped, values other than "2.0" and "4.0" are reported by the model rule
    odata_version: Optional[Any] = Field(default=None, alias="odataVersion")


class DataSource(DescriptorModel):
    """Named backend definition in sap.app/dataSources."""
    type: Optional[str] = Field(default=None, description="Protocol family, OData when omitted")
    settings: Optional[DataSourceSettings] = None


class SapApp(DescriptorModel):
    data_sources: Optional[Dict[str, DataSource]] = Field(default=None, alias="dataSources")


class RootView(DescriptorModel):
    view_name: Optional[str] = Field(default=None, alias="viewName")
    type: Optional[str] = None


class DependencyDeclaration(DescriptorModel):
    """Entry of sap.ui5/dependencies/libs or sap.ui5/dependencies/components."""
    lazy: bool = False

    @field_validator("lazy", mode="before")
    @classmethod
    def coerce_lazy(cls, v: Any) -> bool:
        return bool(v)


class Dependencies(DescriptorModel):
    libs: Optional[Dict[str, Optional[DependencyDeclaration]]] = None
    components: Optional[Dict[str, Optional[DependencyDeclaration]]] = None


class ComponentUsage(DescriptorModel):
    """Entry of sap.ui5/componentUsages; usages are lazy unless stated otherwise."""
    name: Optional[str] = None
    lazy: Optional[bool] = None

    @field_validator("lazy", mode="before")
    @classmethod
    def coerce_lazy(cls, v: Any) -> Optional[bool]:
        return None if v is None else bool(v)


class ModelConfig(DescriptorModel):
    type: Optional[str] = None
    data_source: Optional[str] = Field(default=None, alias="dataSource")


class RoutingDefaults(DescriptorModel):
    """sap.ui5/routing/config: defaults shared by all targets."""
    router_class: Optional[str] = Field(default=None, alias="routerClass")
    targets_class: Optional[str] = Field(default=None, alias="targetsClass")
    view_path: Optional[str] = Field(default=None, alias="viewPath")
    view_name: Optional[str] = Field(default=None, alias="viewName")
    view_type: Optional[str] = Field(default=None, alias="viewType")


class RoutingTarget(DescriptorModel):
    view_path: Optional[str] = Field(default=None, alias="viewPath")
    view_name: Optional[str] = Field(default=None, alias="viewName")
    view_type: Optional[str] = Field(default=None, alias="viewType")


class Routing(DescriptorModel):
    config: Optional[RoutingDefaults] = None
    # routes are declared either as an array or as a name -> route mapping
    routes: Optional[Union[List[Any], Dict[str, Any]]] = None
    targets: Optional[Dict[str, Optional[RoutingTarget]]] = None


class SapUi5(DescriptorModel):
    root_view: Optional[Union[str, RootView]] = Field(default=None, alias="rootView")
    dependencies: Optional[Dependencies] = None
    component_usages: Optional[Dict[str, Optional[ComponentUsage]]] = Field(
        default=None, alias="componentUsages"
    )
    models: Optional[Dict[str, Optional[ModelConfig]]] = None
    routing: Optional[Routing] = None
    # CSS and JS entries are URLs, not module names; kept but never evaluated
    resources: Optional[Dict[str, Any]] = None


class AppDescriptor(DescriptorModel):
    """Parsed application descriptor."""
    sap_app: SapApp = Field(default_factory=SapApp, alias="sap.app")
    sap_ui5: SapUi5 = Field(default_factory=SapUi5, alias="sap.ui5")

    def get_data_source(self, name: str) -> Optional[DataSource]:
        return (self.sap_app.data_sources or {}).get(name)


def parse_descriptor(name: str, content: Union[str, bytes]) -> AppDescriptor:
    """Parse descriptor content.

    Raises:
        DescriptorParseError: content is not JSON, not an object, or one of
            the modelled sections has an unexpected shape.
    """
    try:
        data = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DescriptorParseError(name, e) from e

    if not isinstance(data, dict):
        raise DescriptorParseError(name, ValueError("descriptor must be a JSON object"))

    for section in ("sap.app", "sap.ui5"):
        if data.get(section) is None:
            data.pop(section, None)

    try:
        return AppDescriptor.model_validate(data)
    except ValidationError as e:
        raise DescriptorParseError(name, e) from e
