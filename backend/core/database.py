import logging
from sqlmodel import SQLModel, Session, create_engine
from core.config import DATABASE_URL

logger = logging.getLogger(__name__)

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, connect_args=connect_args)


def create_db_and_tables():
    # table models must be imported before create_all
    from models import complaints, user  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info("Database tables ready at %s", engine.url.render_as_string(hide_password=True))


def get_session():
    with Session(engine) as session:
        yield session
