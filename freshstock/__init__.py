"""WSGI JSON API for sections, sellers and warehouses of a fresh-products warehouse."""

__version__ = "0.1.0"