"""Site configuration.

SiteConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

# Environment variable selecting production mode
ENV_VAR = "VERSO_ENV"


def production_from_env() -> bool:
    """True when ``VERSO_ENV`` is set to ``production``."""
    return os.environ.get(ENV_VAR, "").strip().lower() == "production"


@dataclass(frozen=True, slots=True)
class SiteConfig:
    """Site configuration. Immutable after creation.

    Only ``shell_path`` is required. Override what you need::

        config = SiteConfig(shell_path="src/shell.py", out_dir="dist")
    """

    # Sources and output
    src_dir: str | Path = "src/pages"
    out_dir: str | Path = ".verso/build"
    shell_path: str | Path = ""

    # Filename conventions
    layout_name: str = "layout"
    index_name: str = "index"
    source_extensions: tuple[str, ...] = (".py", ".html")

    # Production disables module cache-busting and template auto-reload
    production: bool = field(default_factory=production_from_env)

    # Raise BuildError after a pass in which any route failed
    throw_on_build_error: bool = False

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False  # reload on file changes

    # Kida
    autoescape: bool = True

    @property
    def src_path(self) -> Path:
        """Absolute source directory."""
        return Path(self.src_dir).resolve()

    @property
    def out_path(self) -> Path:
        """Absolute output directory."""
        return Path(self.out_dir).resolve()

    @property
    def shell_file(self) -> Path:
        """Absolute path of the shell module."""
        return Path(self.shell_path).resolve()
