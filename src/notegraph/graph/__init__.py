"""Note graph: link extraction, vault scanning, edge resolution and reports.

Everything here is a pure, in-memory transform over ``(path, text)`` pairs;
reading files is left to ``notegraph.ingest``.
"""
