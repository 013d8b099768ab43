from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base, Session

Base = declarative_base()


class Database:
    """
    Persistence provider: owns one SQLAlchemy engine and its session factory.
    Constructed explicitly (see main.py) and handed to the app factory, so tests
    can build their own against a throwaway database.
    """

    def __init__(self, database_url: str, echo: bool = False):
        connect_args = {}
        if database_url.startswith("sqlite"):
            # FastAPI may serve a request on a different thread than the one that opened the connection
            connect_args["check_same_thread"] = False

        self.database_url = database_url
        self.engine = create_engine(database_url, echo=echo, connect_args=connect_args)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_tables(self) -> None:
        # models must be imported so their tables are registered on Base.metadata
        from . import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request):
    """
    Dependency function to get a database session.
    The session comes from the Database attached to the running app and is
    closed once the request is finished.
    """
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
