"""Transaction helpers shared by services."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.oroya.core.exceptions import ConflictError


async def commit_or_conflict(session: AsyncSession, conflict_message: str) -> None:
    """Commit the unit of work, turning constraint violations into ConflictError.

    Constraint violations here mean another request won the race between
    our checks and the write.
    """
    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        raise ConflictError(conflict_message) from e
    except Exception:
        await session.rollback()
        raise
