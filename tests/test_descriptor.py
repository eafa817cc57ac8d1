"""
Tests for descriptor parsing.
"""
import json

import pytest

from component_analyzer.descriptor import AppDescriptor, RootView, parse_descriptor
from component_analyzer.errors import DescriptorParseError


class TestParseDescriptor:
    def test_sections_are_optional(self):
        descriptor = parse_descriptor("manifest.json", "{}")
        assert descriptor.sap_app.data_sources is None
        assert descriptor.sap_ui5.root_view is None
        assert descriptor.sap_ui5.routing is None

    def test_null_sections(self):
        descriptor = parse_descriptor("manifest.json", '{"sap.app": null, "sap.ui5": null}')
        assert descriptor.sap_ui5.models is None

    def test_unknown_fields_ignored(self):
        content = json.dumps({
            "_version": "1.12.0",
            "sap.ui": {"technology": "UI5"},
            "sap.ui5": {"contentDensities": {"compact": True}, "rootView": "my.app.Main"},
        })
        descriptor = parse_descriptor("manifest.json", content)
        assert descriptor.sap_ui5.root_view == "my.app.Main"

    def test_bytes_content(self):
        descriptor = parse_descriptor("manifest.json", b'{"sap.ui5": {"rootView": "a.B"}}')
        assert descriptor.sap_ui5.root_view == "a.B"

    def test_root_view_object(self):
        content = '{"sap.ui5": {"rootView": {"viewName": "my.app.Main", "type": "JS", "id": "app"}}}'
        root_view = parse_descriptor("manifest.json", content).sap_ui5.root_view
        assert isinstance(root_view, RootView)
        assert root_view.view_name == "my.app.Main"
        assert root_view.type == "JS"

    def test_aliases(self):
        content = json.dumps({
            "sap.app": {"dataSources": {"main": {"uri": "/odata/", "settings": {"odataVersion": "4.0"}}}},
            "sap.ui5": {
                "dependencies": {"libs": {"sap.m": {"minVersion": "1.60.0"}}},
                "models": {"": {"dataSource": "main"}},
                "routing": {"config": {"viewType": "XML", "routerClass": "sap.m.routing.Router"}},
            },
        })
        descriptor = parse_descriptor("manifest.json", content)
        assert descriptor.get_data_source("main").settings.odata_version == "4.0"
        assert descriptor.sap_ui5.dependencies.libs["sap.m"].lazy is False
        assert descriptor.sap_ui5.models[""].data_source == "main"
        assert descriptor.sap_ui5.routing.config.router_class == "sap.m.routing.Router"

    def test_loosely_typed_fields(self):
        content = json.dumps({
            "sap.app": {"id": 42, "dataSources": {"main": {"uri": None, "settings": {"odataVersion": 4.0}}}},
            "sap.ui5": {
                "dependencies": {
                    "minUI5Version": ["1.108", "2.0"],
                    "libs": {"sap.m": {"minVersion": 1}, "sap.f": {"lazy": None}, "sap.uxap": {"lazy": 1}},
                },
                "componentUsages": {"reuse": {"name": "my.reuse", "lazy": 0}},
            },
        })
        descriptor = parse_descriptor("manifest.json", content)
        assert descriptor.get_data_source("main").settings.odata_version == 4.0
        libs = descriptor.sap_ui5.dependencies.libs
        assert libs["sap.f"].lazy is False
        assert libs["sap.uxap"].lazy is True
        assert descriptor.sap_ui5.component_usages["reuse"].lazy is False

    def test_routes_as_list_or_mapping(self):
        as_list = parse_descriptor("m", '{"sap.ui5": {"routing": {"routes": []}}}')
        as_map = parse_descriptor("m", '{"sap.ui5": {"routing": {"routes": {"home": {}}}}}')
        assert as_list.sap_ui5.routing.routes == []
        assert as_map.sap_ui5.routing.routes == {"home": {}}

    def test_get_data_source_missing(self):
        assert AppDescriptor().get_data_source("nope") is None


class TestParseErrors:
    def test_invalid_json(self):
        with pytest.raises(DescriptorParseError) as exc_info:
            parse_descriptor("my/app/manifest.json", "{not json")
        assert exc_info.value.name == "my/app/manifest.json"

    def test_not_an_object(self):
        with pytest.raises(DescriptorParseError):
            parse_descriptor("manifest.json", "[1, 2]")

    def test_libs_as_list(self):
        # a list gives no library names to resolve, unlike a mistyped field
        with pytest.raises(DescriptorParseError):
            parse_descriptor("manifest.json", '{"sap.ui5": {"dependencies": {"libs": ["sap.m"]}}}')
