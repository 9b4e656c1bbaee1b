"""Layout discovery, composition, and rendering for page sources.

The ``pages/`` directory structure defines pathnames and layout nesting.
Every page is wrapped by the layouts of its ancestor directories,
root outermost, and then by the single site shell::

    pages/
      layout.py          # wraps every page
      index.py           # /
      about/
        layout.html      # wraps /about and below
        index.py         # /about

    /about  ->  shell(layout.py(about/layout.html(about/index.py)))
"""

from verso.pages.compose import compose
from verso.pages.layouts import layouts_for
from verso.pages.loader import ModuleLoader, PythonModule, TemplateModule
from verso.pages.render import render_to_string
from verso.pages.types import LayoutChain

__all__ = [
    "LayoutChain",
    "ModuleLoader",
    "PythonModule",
    "TemplateModule",
    "compose",
    "layouts_for",
    "render_to_string",
]
