"""Run the Todo JSON API with uvicorn: python -m todo_api"""
from __future__ import annotations

import uvicorn

from .settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("todo_api.main:app", host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
