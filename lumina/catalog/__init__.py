"""
Catalog package for the Lumina library browser.

This package holds the book record schema, the read-only catalog store
and the route definitions that expose the browser over HTTP: a
paginated, searchable grid filtered by category, plus a locally saved
"My Library" list. The catalog itself is a static JSON file loaded
once at startup. The router lives in ``router`` and is mounted by
``lumina.main``.
"""
