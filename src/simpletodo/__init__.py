"""
simpletodo: console task list backed by a remote SQL query endpoint.

Every change is sent as SQL over HTTP and followed by a full reload
of the table, so the remote database stays the single source of truth.
"""

__version__ = "0.1.0"
