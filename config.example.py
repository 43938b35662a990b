# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "SIMPLETODO_APP_NAME": "App display name (default: simpletodo).",
    "SIMPLETODO_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    "SIMPLETODO_DATA_DIR": "Local data directory holding simpletodo.log (default: .local/simpletodo).",
    # Query endpoint
    "SIMPLETODO_QUERY_URL": "Database query endpoint (default: http://localhost:8081/query).",
    "SIMPLETODO_QUERY_FIELD": "JSON body field carrying the SQL text (default: sql).",
    "SIMPLETODO_TABLE_NAME": "Table holding the tasks (default: todos).",
    # Transport
    "SIMPLETODO_CONNECT_TIMEOUT_SECONDS": "HTTP connect timeout (default: 5).",
    "SIMPLETODO_READ_TIMEOUT_SECONDS": "HTTP read timeout (default: 10).",
}
