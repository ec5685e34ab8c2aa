import sys

import pytest

from lintkit.cli.plugin_loader import PluginLoader, collect_entry_points, load_plugins
from lintkit.core.errors import PluginLoadError
from lintkit.core.interfaces import AnalysisContext

PLUGIN_CODE = """
from lintkit.core.interfaces import Analyzer, Diagnostic, cli_analyzer


@cli_analyzer
def finds_nothing(ctx):
    return []


@cli_analyzer(name="always-warns")
def warns(ctx):
    return [Diagnostic(rule_code="W001", message="Test warning")]


class CountingAnalyzer(Analyzer):
    id = "counting"

    def analyze(self, ctx):
        return [Diagnostic(rule_code="I001", severity="info", message=str(len(ctx.source)))]


def helper(ctx):
    return []
"""


@pytest.fixture
def loader():
    return PluginLoader()


def test_load_extracts_decorated_functions_and_analyzer_classes(loader, write_plugin):
    plugin_file = write_plugin(PLUGIN_CODE, "test_plugin.py")

    plugin = loader.load(str(plugin_file))

    assert plugin.path == str(plugin_file)
    assert plugin.module is not None
    assert [e.name for e in plugin.entry_points] == [
        "test_plugin.finds_nothing",
        "test_plugin.always-warns",
        "test_plugin.counting",
    ]
    assert plugin.warnings == []


def test_entry_points_are_callable(loader, write_plugin):
    plugin = loader.load(write_plugin(PLUGIN_CODE))
    ctx = AnalysisContext(path="a.py", source="abc")

    by_name = {e.name.split(".", 1)[1]: e for e in plugin.entry_points}

    assert by_name["always-warns"](ctx)[0].rule_code == "W001"
    assert by_name["counting"](ctx)[0].message == "3"


def test_missing_file_is_reported_by_name(loader):
    with pytest.raises(PluginLoadError) as excinfo:
        loader.load("nonexistent.dll")

    assert "not found" in str(excinfo.value)
    assert "nonexistent.dll" in str(excinfo.value)
    assert excinfo.value.path == "nonexistent.dll"


@pytest.mark.parametrize("path", ["a" * 300 + ".py", "special@#$%^&*().py"])
def test_unusual_missing_paths_are_not_found(loader, path):
    with pytest.raises(PluginLoadError, match="not found"):
        loader.load(path)


def test_non_python_file_fails_to_load(loader, tmp_path):
    bogus = tmp_path / "analyzer.dll"
    bogus.write_text("This is not a valid DLL")

    with pytest.raises(PluginLoadError, match="Failed to load analyzer from"):
        loader.load(str(bogus))


def test_syntax_error_fails_to_load(loader, write_plugin):
    plugin_file = write_plugin("def broken(:\n", "broken.py")

    with pytest.raises(PluginLoadError) as excinfo:
        loader.load(str(plugin_file))

    assert str(plugin_file) in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, SyntaxError)


def test_import_time_exception_fails_to_load(loader, write_plugin):
    plugin_file = write_plugin("raise RuntimeError('boom at import')\n", "explodes.py")

    with pytest.raises(PluginLoadError, match="boom at import"):
        loader.load(plugin_file)


def test_module_without_entry_points_is_valid(loader, write_plugin):
    plugin = loader.load(write_plugin("VALUE = 1\n\ndef plain(ctx):\n    return []\n"))

    assert plugin.entry_points == []


def test_imported_names_are_not_entry_points(loader, write_plugin):
    importer = write_plugin(
        """
        from lintkit.core.interfaces import Analyzer, cli_analyzer
        """,
        "second.py",
    )

    assert loader.load(importer).entry_points == []


def test_abstract_and_failing_analyzer_classes(loader, write_plugin):
    plugin_file = write_plugin(
        """
        from lintkit.core.interfaces import Analyzer


        class StillAbstract(Analyzer):
            pass


        class NeedsArguments(Analyzer):
            def __init__(self, threshold):
                self.threshold = threshold

            def analyze(self, ctx):
                return []
        """,
        "classes.py",
    )

    plugin = loader.load(plugin_file)

    assert plugin.entry_points == []
    assert len(plugin.warnings) == 1
    assert "classes.NeedsArguments" in plugin.warnings[0]


def test_load_all_partitions_successes_and_failures(loader, write_plugin):
    valid = write_plugin(PLUGIN_CODE)

    loaded, errors = loader.load_all([str(valid), "nonexistent.dll"])

    assert len(loaded) == 1
    assert len(errors) == 1
    assert "not found" in errors[0] and "nonexistent.dll" in errors[0]


def test_load_all_missing_path_only():
    loaded, errors = load_plugins(["nonexistent.dll"])

    assert loaded == []
    assert len(errors) == 1
    assert "not found" in errors[0]
    assert "nonexistent.dll" in errors[0]


def test_load_all_empty_list(loader):
    assert loader.load_all([]) == ([], [])


def test_loading_same_path_twice_gives_independent_plugins(loader, write_plugin):
    plugin_file = write_plugin(PLUGIN_CODE)

    loaded, errors = loader.load_all([plugin_file, plugin_file])

    assert errors == []
    assert len(loaded) == 2
    assert loaded[0].module is not loaded[1].module
    assert len(collect_entry_points(loaded)) == 6


def test_collect_entry_points_keeps_load_order(loader, write_plugin):
    first = write_plugin("from lintkit.core.interfaces import cli_analyzer\n@cli_analyzer\ndef a(ctx):\n    return []\n", "first.py")
    second = write_plugin("from lintkit.core.interfaces import cli_analyzer\n@cli_analyzer\ndef b(ctx):\n    return []\n", "second.py")

    loaded, _ = loader.load_all([second, first])

    assert [e.name for e in collect_entry_points(loaded)] == ["second.b", "first.a"]


def test_sys_exit_at_import_is_a_load_error(loader, write_plugin):
    bad = write_plugin("raise SystemExit('no')\n", "bad.py")
    good = write_plugin(PLUGIN_CODE, "good.py")

    loaded, errors = loader.load_all([bad, good])

    assert [p.path for p in loaded] == [str(good)]
    assert errors == [f"Failed to load analyzer from {bad}: no"]


def test_sys_exit_in_analyzer_constructor_is_a_warning(loader, write_plugin):
    plugin_file = write_plugin(
        """
        import sys

        from lintkit.core.interfaces import Analyzer


        class Quitter(Analyzer):
            def __init__(self):
                sys.exit(4)

            def analyze(self, ctx):
                return []
        """,
        "quitter.py",
    )

    plugin = loader.load(plugin_file)

    assert plugin.entry_points == []
    assert plugin.warnings == [f"Failed to create analyzer quitter.Quitter from {plugin_file}: 4"]


def test_release_drops_registered_modules(loader, write_plugin):
    plugin = loader.load(write_plugin(PLUGIN_CODE))
    module_name = plugin.module.__name__
    assert sys.modules[module_name] is plugin.module

    loader.release()

    assert module_name not in sys.modules
    assert plugin.entry_points[1](AnalysisContext(path="a.py", source=""))[0].rule_code == "W001"


def test_failed_import_leaves_nothing_registered(loader, write_plugin):
    before = set(sys.modules)

    with pytest.raises(PluginLoadError):
        loader.load(write_plugin("raise RuntimeError('x')\n", "fails.py"))

    assert not [name for name in set(sys.modules) - before if name.startswith("lintkit_plugin_")]
