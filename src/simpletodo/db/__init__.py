"""
Remote database access.

Components:
- client.py: HTTP query transport and the response envelope (QueryResult)
- sql.py: statement text with client-side parameter binding
"""
