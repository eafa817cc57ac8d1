import threading

from component_analyzer.module_info import DependencyStrength, ModuleInfo


class TestAddDependency:
    def test_required_by_default(self):
        info = ModuleInfo("my/app/Component.js")
        info.add_dependency("sap/m/library.js")
        assert info.is_required_dependency("sap/m/library.js")
        assert not info.is_conditional_dependency("sap/m/library.js")

    def test_conditional(self):
        info = ModuleInfo()
        info.add_dependency("sap/f/library.js", True)
        assert info.is_conditional_dependency("sap/f/library.js")

    def test_conditional_does_not_downgrade_required(self):
        info = ModuleInfo()
        info.add_dependency("sap/m/library.js")
        info.add_dependency("sap/m/library.js", conditional=True)
        assert info.get_strength("sap/m/library.js") == DependencyStrength.REQUIRED

    def test_required_upgrades_conditional(self):
        info = ModuleInfo()
        info.add_dependency("sap/m/library.js", conditional=True)
        info.add_dependency("sap/m/library.js")
        assert info.is_required_dependency("sap/m/library.js")

    def test_no_duplicates(self):
        info = ModuleInfo()
        for _ in range(3):
            info.add_dependency("a.js")
            info.add_dependency("a.js", True)
        assert info.dependencies == ["a.js"]
        assert len(info) == 1
        assert "a.js" in info

    def test_unknown_dependency(self):
        info = ModuleInfo()
        assert info.get_strength("x.js") is None
        assert not info.is_required_dependency("x.js")
        assert not info.is_conditional_dependency("x.js")


def test_to_dict_sorted():
    info = ModuleInfo()
    info.add_dependency("b.js", True)
    info.add_dependency("a.js")
    assert info.to_dict() == {"a.js": "required", "b.js": "conditional"}


def test_concurrent_writers():
    info = ModuleInfo()

    def writer(conditional):
        for i in range(200):
            info.add_dependency(f"m{i}.js", conditional)

    threads = [threading.Thread(target=writer, args=(i % 2 == 1,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(info) == 200
    assert all(info.is_required_dependency(f"m{i}.js") for i in range(200))
