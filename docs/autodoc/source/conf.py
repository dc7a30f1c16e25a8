# Configuration file for Sphinx documentation builder
import os
import sys

sys.path.insert(0, os.path.abspath("../../../"))

from dtomapper import __version__  # noqa: E402

project = "dto-mapper"
copyright = "2024"
author = "Research Team"
release = __version__

extensions = [
    "sphinx.ext.intersphinx",
    "sphinx.ext.viewcode",
    "sphinx.ext.autosummary",
    "sphinx.ext.autodoc.typehints",
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.graphviz",
]

autodoc_default_options = {
    "members": True,
    "member-order": "bysource",
    "special-members": "__init__",
    "undoc-members": True,
    "show-inheritance": True,
}

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "pydantic": ("https://docs.pydantic.dev/latest", None),
}

html_theme = "alabaster"
html_static_path = ["_static"]
