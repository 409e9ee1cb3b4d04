"""Store access dependency.

Tests swap the store by overriding ``get_executor`` on the app.
"""

from typing import Annotated

from fastapi import Depends

from src.keylight.core.db import QueryExecutor, get_engine


def get_executor() -> QueryExecutor:
    """Executor bound to the process-wide pooled engine."""
    return QueryExecutor(get_engine())


Executor = Annotated[QueryExecutor, Depends(get_executor)]
