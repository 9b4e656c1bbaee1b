"""Tests for verso.routing.table — source and output route tables."""

from pathlib import Path

import pytest

from verso.config import SiteConfig
from verso.errors import ConfigurationError
from verso.routing.table import RouteEntry, RouteTable, normalize_pathname


class TestNormalizePathname:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("", "/"),
            ("/", "/"),
            ("about", "/about"),
            ("/about/", "/about"),
            ("//about//team/", "/about/team"),
        ],
    )
    def test_normalizes(self, raw: str, expected: str) -> None:
        assert normalize_pathname(raw) == expected


class TestSourceTable:
    def test_all_routes(self, config: SiteConfig) -> None:
        table = RouteTable.scan_sources(config)
        pages = config.src_path

        assert table.all_routes() == {
            "/": pages / "index.py",
            "/about": pages / "about" / "index.py",
            "/about/team": pages / "about" / "team.py",
        }

    def test_layouts_never_routed(self, config: SiteConfig) -> None:
        table = RouteTable.scan_sources(config)

        assert all(path.stem != "layout" for path in table.all_routes().values())
        assert table.match("/layout") is None
        assert table.match("/about/layout") is None

    def test_match_layout(self, config: SiteConfig) -> None:
        table = RouteTable.scan_sources(config)

        root = table.match_layout("/")
        about = table.match_layout("/about/")
        assert root == RouteEntry("/layout", config.src_path / "layout.py")
        assert about == RouteEntry("/about/layout", config.src_path / "about" / "layout.py")
        assert table.match_layout("/about/team") is None

    def test_match_normalizes(self, config: SiteConfig) -> None:
        table = RouteTable.scan_sources(config)

        entry = table.match("about/")
        assert entry is not None
        assert entry.pathname == "/about"
        assert "/about/team" in table
        assert "/missing" not in table

    def test_private_files_and_assets_skipped(self, config: SiteConfig) -> None:
        table = RouteTable.scan_sources(config)

        paths = {p.name for p in table.all_routes().values()}
        assert "_helpers.py" not in paths
        assert "main.css" not in paths
        assert "data.json" not in paths

    def test_shell_inside_src_dir_excluded(self, tmp_path: Path, write_source) -> None:
        pages = tmp_path / "pages"
        write_source(pages / "index.py", "def render():\n    return 'home'\n")
        write_source(pages / "shell.py", "def render(children):\n    return children\n")
        config = SiteConfig(src_dir=pages, shell_path=pages / "shell.py")

        table = RouteTable.scan_sources(config)
        assert list(table.all_routes()) == ["/"]

    def test_html_sources(self, tmp_path: Path, write_source) -> None:
        pages = tmp_path / "pages"
        write_source(pages / "contact.html", "<p>contact</p>")
        write_source(pages / "layout.html", "{{ children }}")

        table = RouteTable(pages, extensions=(".py", ".html"), layout_name="layout")
        assert table.all_routes() == {"/contact": pages.resolve() / "contact.html"}
        assert table.match_layout("/") is not None

    def test_duplicate_pathname_keeps_first(self, tmp_path: Path, write_source) -> None:
        pages = tmp_path / "pages"
        write_source(pages / "about.py", "def render():\n    return 'a'\n")
        write_source(pages / "about" / "index.py", "def render():\n    return 'b'\n")

        table = RouteTable(pages, extensions=(".py",), layout_name="layout")
        entry = table.match("/about")
        assert entry is not None
        assert entry.path.name == "about.py"

    def test_missing_directory_is_fatal(self, tmp_path: Path) -> None:
        config = SiteConfig(src_dir=tmp_path / "nope", shell_path=tmp_path / "shell.py")

        with pytest.raises(ConfigurationError, match="not found"):
            RouteTable.scan_sources(config)


class TestOutputTable:
    def test_missing_directory_is_empty(self, config: SiteConfig) -> None:
        table = RouteTable.scan_outputs(config)
        assert len(table) == 0
        assert table.match("/") is None

    def test_html_files_only(self, config: SiteConfig, write_source) -> None:
        out = config.out_path
        write_source(out / "index.html", "<p>home</p>")
        write_source(out / "about" / "index.html", "<p>about</p>")
        write_source(out / "about" / "team.html", "<p>team</p>")
        write_source(out / "styles" / "main.css", "body {}")

        table = RouteTable.scan_outputs(config)
        assert sorted(table.all_routes()) == ["/", "/about", "/about/team"]
        assert table.match("/styles/main") is None

    def test_reload_picks_up_new_files(self, config: SiteConfig, write_source) -> None:
        table = RouteTable.scan_outputs(config)
        assert table.match("/") is None

        write_source(config.out_path / "index.html", "<p>home</p>")
        table.reload()

        entry = table.match("/")
        assert entry is not None
        assert entry.path == config.out_path / "index.html"

    def test_layout_named_output_is_a_route(self, config: SiteConfig, write_source) -> None:
        write_source(config.out_path / "layout.html", "<p>a page called layout</p>")

        table = RouteTable.scan_outputs(config)
        assert "/layout" in table
