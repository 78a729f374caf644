"""Session management for database operations.

Provides the FastAPI session dependency and the ``db_transaction``
decorator used by the service layer to commit or roll back a unit of work.
"""

from typing import AsyncGenerator, Callable, Optional, TypeVar
import logging
import inspect
from functools import wraps

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from app.db.base import get_session

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions.

    One session per request; it is rolled back if the request fails and
    closed in every case.

    Yields:
        AsyncSession: A SQLAlchemy async session object.
    """
    async with get_session() as session:
        try:
            yield session
        except SQLAlchemyError:
            logger.exception("Database error occurred")
            await session.rollback()
            raise
        except Exception:
            await session.rollback()
            raise


def _find_session_parameter(func: Callable, db_param_name: Optional[str]) -> tuple:
    """Locate the session parameter of ``func`` by name or by annotation."""
    for position, (name, param) in enumerate(inspect.signature(func).parameters.items()):
        if db_param_name is not None:
            if name == db_param_name:
                return position, name
        elif param.annotation is AsyncSession:
            return position, name

    logger.warning(f"Unable to find database session parameter in function '{func.__name__}'")
    return None, None


def db_transaction(db_param_name: Optional[str] = None) -> Callable:
    """Decorator to wrap a coroutine in a database transaction.

    Commits on success, rolls back and re-raises on error.

    Args:
        db_param_name: Name of the session parameter. When omitted the first
            parameter annotated as AsyncSession is used.

    Example:
        ```python
        @db_transaction(db_param_name="db")
        async def delete_url(self, db: AsyncSession, url_id: int) -> bool:
            ...
        ```

    Raises:
        ValueError: If no session is passed to the decorated function
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        db_param_pos, db_param_key = _find_session_parameter(func, db_param_name)

        @wraps(func)
        async def wrapper(*args, **kwargs):
            db = None
            if db_param_key is not None and db_param_key in kwargs:
                db = kwargs[db_param_key]
            elif db_param_pos is not None and len(args) > db_param_pos:
                db = args[db_param_pos]

            if db is None:
                raise ValueError(
                    f"Database session not found in function arguments for '{func.__name__}'"
                )

            try:
                result = await func(*args, **kwargs)
                await db.commit()
                return result
            except Exception as e:
                await db.rollback()
                logger.info(f"Transaction rolled back in '{func.__name__}': {e!r}")
                raise

        return wrapper
    return decorator
