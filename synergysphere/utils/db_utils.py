from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from synergysphere.database.base import Base
from synergysphere.database.session import Database
from synergysphere.utils.logger import get_logger

logger = get_logger(__name__)

def log_table_schema(engine: Engine, table_name: str):
    """
    Logs the schema (columns and nullability) of a specified table.
    """
    inspector = inspect(engine)
    try:
        columns = inspector.get_columns(table_name)
    except SQLAlchemyError as e:
        logger.error(f"Error inspecting table '{table_name}': {e}")
        return

    if not columns:
        logger.warning(f"Table '{table_name}' not found or has no columns.")
        return

    logger.info(f"Schema for table: {table_name}")
    for column in columns:
        logger.info(f"Column: {column['name']} | {column['type']} | Nullable: {column['nullable']}")

def setup_schema(database: Database, reset: bool = False) -> list[str]:
    """
    Creates every table known to the models. With `reset`, existing tables
    are dropped first (all data is lost).
    Returns the names of the tables present afterwards.
    """
    if reset:
        # Import models so they are registered on the metadata
        import synergysphere.models  # noqa: F401
        logger.warning("Dropping all tables...")
        Base.metadata.drop_all(bind=database.engine)

    database.create_all()
    tables = sorted(inspect(database.engine).get_table_names())
    logger.info(f"Database tables ready: {', '.join(tables)}")
    return tables
