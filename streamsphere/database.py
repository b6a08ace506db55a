# streamsphere/database.py
from sqlmodel import SQLModel, create_engine, Session

from streamsphere.core.config import settings

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # FastAPI runs sync endpoints in a threadpool
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    connect_args=connect_args,
)

def init_db() -> None:
    """
    Create all tables that are defined via SQLModel subclasses.
    """
    # make sure every table model is registered on the metadata
    import streamsphere.models.user  # noqa: F401
    import streamsphere.models.movie  # noqa: F401
    import streamsphere.models.password_reset  # noqa: F401

    SQLModel.metadata.create_all(engine)

def get_db():
    with Session(engine) as session:
        yield session
