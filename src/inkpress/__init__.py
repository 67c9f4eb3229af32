"""Inkpress: blog and CMS backend."""

__version__ = "0.1.0"
