"""Docs site — nested layouts, a kida layout, and passthrough assets.

Every page is wrapped by ``pages/layout.py``; pages under ``docs/``
are also wrapped by the kida template ``pages/docs/layout.html``.

Run:
    python app.py

or build once:
    verso build app:site
"""

from pathlib import Path

from verso import Site, SiteConfig

HERE = Path(__file__).parent


def health(exchange):
    if exchange.request.path == "/healthz":
        exchange.set_response("ok", content_type="text/plain")


def create_site(out_dir=HERE / ".verso" / "build"):
    site = Site(
        SiteConfig(
            src_dir=HERE / "pages",
            out_dir=out_dir,
            shell_path=HERE / "shell.py",
            debug=True,
        )
    )
    site.add_handler(health)
    return site


site = create_site()


if __name__ == "__main__":
    site.run()
