from datetime import datetime, timezone

from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker

from app.config import settings
from app.utils.logs import get_logger

log = get_logger("db")

# bump when the products table layout changes
SCHEMA_VERSION = 1

DATABASE_URL = settings.DATABASE_URL
_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(
    DATABASE_URL, future=True, echo=settings.SQL_ECHO, connect_args=_connect_args
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


class SchemaVersionError(RuntimeError):
    pass


def check_connection() -> bool:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False


def init_db(reset: bool = False) -> int:
    """
    Bring the store to SCHEMA_VERSION before the app serves traffic.

    Steps:
      - open a connection (`SELECT 1`) so an unreachable store fails here,
      - optionally drop every table (RESET_DB, used by tests and CI),
      - create missing tables,
      - record the schema version, refusing a store written by newer code.

    Any failure is logged and re-raised; callers must not continue serving.
    Returns the schema version now recorded in the store.
    """
    # make sure model modules are imported so metadata is populated
    from app.models.product import Product  # noqa: F401
    from app.models.schema_version import SchemaVersion

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        log.info("Database connection established.")

        if reset:
            log.warning("Resetting database (RESET_DB set)...")
            Base.metadata.drop_all(bind=engine)

        Base.metadata.create_all(bind=engine)

        s = SessionLocal()
        try:
            current = s.query(SchemaVersion).order_by(SchemaVersion.version.desc()).first()
            if current is not None and current.version > SCHEMA_VERSION:
                raise SchemaVersionError(
                    f"store schema version {current.version} is newer than "
                    f"supported version {SCHEMA_VERSION}"
                )
            if current is None or current.version < SCHEMA_VERSION:
                s.add(
                    SchemaVersion(
                        version=SCHEMA_VERSION,
                        applied_at=datetime.now(timezone.utc).replace(tzinfo=None),
                    )
                )
                s.commit()
                log.info("Schema version %s applied.", SCHEMA_VERSION)
        finally:
            s.close()
    except Exception:
        log.exception("Unable to initialize the database")
        raise

    log.info("Database synced successfully.")
    return SCHEMA_VERSION


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
