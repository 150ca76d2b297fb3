"""
Todo JSON API package.

A FastAPI service exposing CRUD and complete/undo operations over todos
stored in a single JSON file. Build an app with `todo_api.main.create_app`;
`todo_api.main.app` is configured from the environment.
"""

__version__ = "0.1.0"
