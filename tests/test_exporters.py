"""Tests for exporters."""

import json
import pytest
from pathlib import Path

from graph.model import Module, ModuleRegistry
from exporters.ascii_exporter import to_ascii, to_listing
from exporters.json_exporter import to_json
from exporters.mermaid_exporter import to_mermaid


ROOT = Path("/repo")


@pytest.fixture
def registry():
    """entry -> a -> b, entry -> b, b -> a, entry -> lodash."""
    registry = ModuleRegistry()
    entry, a, b = ROOT / "entry.js", ROOT / "lib" / "a.js", ROOT / "lib" / "b.js"
    for path in (entry, a, b):
        registry.insert(Module(id=registry.next_id(), canonical_path=path))
    registry.add_edge(entry, a)
    registry.add_edge(a, b)
    registry.add_edge(b, a)
    registry.add_edge(entry, b)
    registry.add_external(entry, "lodash")
    return registry


class TestListing:
    """Tests for the id/path listing."""

    def test_listing(self, registry):
        """Test one line per module in id order."""
        output = to_listing(registry, base=ROOT)

        assert output.splitlines() == ["0\tentry.js", "1\tlib/a.js", "2\tlib/b.js"]

    def test_listing_absolute(self, registry):
        """Test absolute paths when no base is given."""
        output = to_listing(registry)

        assert output.splitlines()[0] == "0\t/repo/entry.js"

    def test_empty_registry(self):
        """Test exporting an empty registry."""
        assert to_listing(ModuleRegistry()) == ""


class TestAsciiExporter:
    """Tests for the dependency tree exporter."""

    def test_tree_output(self, registry):
        """Test the Unicode tree layout."""
        output = to_ascii(registry, base=ROOT)

        assert output.splitlines() == [
            "entry.js (0)",
            "├── lib/a.js (1)",
            "│   └── lib/b.js (2)",
            "│       └── lib/a.js (1) [*]",
            "├── lib/b.js (2) [*]",
            "└── lodash [EXTERNAL]",
        ]

    def test_ascii_style(self, registry):
        """Test pure ASCII output."""
        output = to_ascii(registry, base=ROOT, style="ascii")

        assert "|-- lib/a.js (1)" in output
        assert "\\-- lodash [EXTERNAL]" in output
        assert "├" not in output

    def test_hide_external(self, registry):
        """Test hiding package specifiers."""
        output = to_ascii(registry, base=ROOT, include_external=False)

        assert "lodash" not in output
        assert output.splitlines()[-1] == "└── lib/b.js (2) [*]"

    def test_empty_registry(self):
        """Test exporting an empty registry."""
        assert to_ascii(ModuleRegistry()) == ""


class TestJsonExporter:
    """Tests for JSON exporter."""

    def test_structure(self, registry):
        """Test the JSON document layout."""
        data = json.loads(to_json(registry, base=ROOT))

        assert data["entry"] == "entry.js"
        assert data["modules"] == [
            {"id": 0, "path": "entry.js"},
            {"id": 1, "path": "lib/a.js"},
            {"id": 2, "path": "lib/b.js"},
        ]
        assert data["edges"] == [
            {"source": 0, "target": 1},
            {"source": 0, "target": 2},
            {"source": 1, "target": 2},
            {"source": 2, "target": 1},
        ]
        assert data["external"] == [{"source": 0, "specifier": "lodash"}]

    def test_hide_external(self, registry):
        """Test omitting external specifiers."""
        data = json.loads(to_json(registry, base=ROOT, include_external=False))

        assert "external" not in data

    def test_empty_registry(self):
        """Test exporting an empty registry."""
        data = json.loads(to_json(ModuleRegistry()))

        assert data == {"entry": None, "modules": [], "edges": [], "external": []}


class TestMermaidExporter:
    """Tests for Mermaid exporter."""

    def test_simple_graph(self, registry):
        """Test nodes, edges and external packages."""
        output = to_mermaid(registry, base=ROOT)

        assert output.startswith("flowchart LR")
        assert 'm0["entry.js"]' in output
        assert 'm1["lib/a.js"]' in output
        assert "m0 --> m1" in output
        assert "m2 --> m1" in output
        assert "lodash [EXTERNAL]" in output
        assert "m0 -.-> ext_lodash_0" in output

    def test_orientation(self, registry):
        """Test different orientations."""
        for orientation in ["LR", "TD", "TB", "RL", "BT"]:
            output = to_mermaid(registry, orientation=orientation)
            assert output.startswith(f"flowchart {orientation}")

    def test_scoped_package_ids(self):
        """Test that scoped package names become valid, distinct ids."""
        registry = ModuleRegistry()
        entry = ROOT / "entry.js"
        registry.insert(Module(id=0, canonical_path=entry))
        registry.add_external(entry, "@scope/pkg")
        registry.add_external(entry, "scope-pkg")

        output = to_mermaid(registry)

        assert "ext__scope_pkg_0" in output
        assert "ext_scope_pkg_1" in output

    def test_hide_external(self, registry):
        """Test omitting external specifiers."""
        output = to_mermaid(registry, include_external=False)

        assert "lodash" not in output
        assert "-.->" not in output

    def test_quotes_in_labels_are_escaped(self):
        """Double quotes cannot end a node label early."""
        registry = ModuleRegistry()
        entry = ROOT / 'say "hi".js'
        registry.insert(Module(id=0, canonical_path=entry))
        registry.add_external(entry, 'pkg"name')

        output = to_mermaid(registry, base=ROOT)

        assert 'm0["say #quot;hi#quot;.js"]' in output
        assert '["pkg#quot;name [EXTERNAL]"]' in output

    def test_no_external_block_without_packages(self):
        """The external section is omitted when nothing requires a package."""
        registry = ModuleRegistry()
        registry.insert(Module(id=0, canonical_path=ROOT / "entry.js"))

        output = to_mermaid(registry)

        assert "External packages" not in output
