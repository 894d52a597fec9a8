"""
Todo REST service package.

The FastAPI application lives in `todo_api.main`; persistence gateways in
`todo_api.gateways` (in-memory) and `todo_api.db` (SQLite).
"""
