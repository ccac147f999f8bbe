import datetime

import formedit

# -- Project information -----------------------------------------------------

project = "Formedit"
copyright = f"{datetime.date.today().year}, Formedit contributors"
author = "Formedit contributors"
release = version = formedit.__version__


# -- General configuration ---------------------------------------------------

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.intersphinx",
]

intersphinx_mapping = {
    "python": ("https://docs.python.org/3/", None),
}
autodoc_typehints_format = "short"
autodoc_member_order = "bysource"

# -- Options for HTML output -------------------------------------------------

html_theme = "furo"
