import pytest
from unittest.mock import AsyncMock

from component_analyzer.diagnostics import DiagnosticCode, RecordingDiagnostics, Severity
from component_analyzer.loader import DescriptorLoader, descriptor_name_for, is_base_component
from component_analyzer.resources import InMemoryResourcePool


def test_descriptor_name_for():
    assert descriptor_name_for("my/app/sub/Component.js") == "my/app/sub/manifest.json"


def test_is_base_component():
    assert is_base_component("sap/ui/core/Component.js")
    assert not is_base_component("sap/ui/core/sample/Component.js")


@pytest.mark.asyncio
async def test_loads_sibling_descriptor():
    pool = InMemoryResourcePool({"my/app/manifest.json": '{"sap.ui5": {"rootView": "my.app.Main"}}'})
    diagnostics = RecordingDiagnostics()
    descriptor = await DescriptorLoader(pool, diagnostics).load("my/app/Component.js")
    assert descriptor.sap_ui5.root_view == "my.app.Main"
    assert diagnostics.records == []


@pytest.mark.asyncio
async def test_missing_descriptor_is_verbose():
    diagnostics = RecordingDiagnostics()
    descriptor = await DescriptorLoader(InMemoryResourcePool(), diagnostics).load("myapp/sub/Component.js")

    assert descriptor is None
    assert len(diagnostics.records) == 1
    record = diagnostics.records[0]
    assert record.severity == Severity.VERBOSE
    assert record.code == DiagnosticCode.MANIFEST_NOT_FOUND
    assert record.context["component"] == "myapp/sub/Component.js"
    assert record.context["manifest"] == "myapp/sub/manifest.json"


@pytest.mark.asyncio
async def test_malformed_descriptor_is_error():
    pool = InMemoryResourcePool({"my/app/manifest.json": "{ this is not json"})
    diagnostics = RecordingDiagnostics()
    descriptor = await DescriptorLoader(pool, diagnostics).load("my/app/Component.js")

    assert descriptor is None
    assert len(diagnostics.errors) == 1
    assert diagnostics.errors[0].code == DiagnosticCode.MANIFEST_PARSE_ERROR
    assert "my/app/Component.js" in diagnostics.errors[0].message


@pytest.mark.asyncio
async def test_base_component_skips_lookup():
    pool = AsyncMock()
    descriptor = await DescriptorLoader(pool, RecordingDiagnostics()).load("sap/ui/core/Component.js")
    assert descriptor is None
    pool.find_resource.assert_not_awaited()
