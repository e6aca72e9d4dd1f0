# Configuration file for the Sphinx documentation builder.

project = "ojs-statsd"
copyright = "2026, ojs-statsd Contributors"
author = "ojs-statsd Contributors"

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.viewcode",
    "sphinx.ext.napoleon",
]

# Napoleon settings for Google-style docstrings
napoleon_google_docstring = True
napoleon_numpy_docstring = False

autodoc_member_order = "bysource"
autodoc_typehints = "description"

html_theme = "alabaster"
html_theme_options = {
    "description": "StatsD metrics middleware for Open Job Spec workers",
}
