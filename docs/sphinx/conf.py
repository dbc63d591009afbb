# Copyright 2026 mofxmi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for the mofxmi documentation."""

project = "mofxmi"
author = "mofxmi Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc", "sphinx.ext.napoleon"]

html_theme = "alabaster"
