"""
Conversion engine core: canonical models, scoring, heuristics and the
adapter registry. Nothing in here performs I/O except FormatAdapter.read()
and write(), which callers opt into.
"""
