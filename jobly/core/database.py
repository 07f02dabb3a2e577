import re
from typing import Any, Dict, List, Sequence

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from jobly.core.config import settings

engine_options: Dict[str, Any] = {"pool_pre_ping": True}  # Verify connections before using them
if not settings.DATABASE_URL.startswith("sqlite"):
    engine_options.update(
        pool_size=10,  # Connection pool size
        max_overflow=20,  # Allow up to 20 connections beyond pool_size
    )

# Create SQLAlchemy engine
engine = create_engine(settings.DATABASE_URL, **engine_options)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()

_POSITIONAL_PLACEHOLDER = re.compile(r"\$(\d+)")
_ILIKE = re.compile(r"\bILIKE\b", re.IGNORECASE)


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def run_query(db: Session, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
    """
    Execute SQL written with positional placeholders and commit.

    `$1` binds params[0], `$2` binds params[1] and so on. Each call is its own
    statement and is committed right away.

    Args:
        db: Database session
        sql: Statement text using $1..$n placeholders
        params: Values for the placeholders, in order

    Returns:
        Result rows as dicts (empty list for statements without RETURNING)
    """
    bind_params = {f"p{position}": value for position, value in enumerate(params, start=1)}
    statement = _POSITIONAL_PLACEHOLDER.sub(lambda match: f":p{match.group(1)}", sql)

    # SQLite has no ILIKE; its LIKE is already case-insensitive for ASCII
    if db.get_bind().dialect.name == "sqlite":
        statement = _ILIKE.sub("LIKE", statement)

    result = db.execute(text(statement), bind_params)
    rows = [dict(row) for row in result.mappings()] if result.returns_rows else []
    db.commit()

    return rows


def init_db():
    """
    Initialize database.

    We rely on Alembic for table creation, so this only makes sure the models
    are imported and registered on Base.metadata.

    Use "alembic upgrade head" to create/update database schema.
    """
    from jobly.models import company, job, user  # noqa: F401  Import models to register them
