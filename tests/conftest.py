"""Shared fixtures: small page trees written into ``tmp_path``."""

import textwrap
from pathlib import Path

import pytest

from verso.config import SiteConfig


def write(path: Path, source: str) -> Path:
    """Write dedented *source* to *path*, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(source).lstrip(), encoding="utf-8")
    return path


SHELL = """
    def render(children):
        return f"<html><body>{children}</body></html>"
"""

ROOT_LAYOUT = """
    def render(children):
        return f'<div data-layout="root">{children}</div>'
"""

ABOUT_LAYOUT = """
    def render(children, pathname):
        return f'<section data-layout="about" data-path="{pathname}">{children}</section>'
"""

HOME_PAGE = """
    def render():
        return "<p>home</p>"
"""

ABOUT_PAGE = """
    def render(pathname):
        return f'<p data-page="about">{pathname}</p>'
"""


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    """A site with a root layout, a nested layout, and a few assets.

    pages/
      index.py, layout.py
      about/index.py, about/layout.py, about/team.py
      styles/main.css, data.json, logo.png, module.wasm
      _helpers.py
    shell.py
    """
    pages = tmp_path / "pages"
    write(pages / "index.py", HOME_PAGE)
    write(pages / "layout.py", ROOT_LAYOUT)
    write(pages / "about" / "index.py", ABOUT_PAGE)
    write(pages / "about" / "layout.py", ABOUT_LAYOUT)
    write(
        pages / "about" / "team.py",
        """
        async def render():
            return ["<ul>", "<li>Ada</li>", "<li>Grace</li>", "</ul>"]
        """,
    )
    write(pages / "styles" / "main.css", "body { color: red; }\n")
    write(pages / "data.json", '{"ok": true}\n')
    (pages / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    (pages / "module.wasm").write_bytes(b"\x00asm\x01\x00\x00\x00")
    write(pages / "_helpers.py", "raise RuntimeError('private modules are never loaded')\n")
    write(tmp_path / "shell.py", SHELL)
    return tmp_path


@pytest.fixture
def config(site_dir: Path) -> SiteConfig:
    return SiteConfig(
        src_dir=site_dir / "pages",
        out_dir=site_dir / "out",
        shell_path=site_dir / "shell.py",
        production=False,
    )


@pytest.fixture
def write_source():
    """The :func:`write` helper, for tests that build their own trees."""
    return write


@pytest.fixture
def make_config(tmp_path: Path):
    """Build a config for a custom page tree.

    ``make_config({"index.py": HOME_PAGE})`` writes the pages below
    ``tmp_path/custom/pages`` next to the plain shell.
    """

    def factory(pages: dict[str, str], *, shell: str = SHELL, **overrides) -> SiteConfig:
        root = tmp_path / "custom"
        for name, source in pages.items():
            write(root / "pages" / name, source)
        write(root / "shell.py", shell)
        options = {
            "src_dir": root / "pages",
            "out_dir": root / "out",
            "shell_path": root / "shell.py",
            "production": False,
            **overrides,
        }
        return SiteConfig(**options)

    return factory
