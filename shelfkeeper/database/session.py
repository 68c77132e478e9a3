from sqlalchemy.orm import sessionmaker

from shelfkeeper.database.engine import engine


def make_session_factory(bind):
    return sessionmaker(
        autoflush=False,
        expire_on_commit=False,
        bind=bind,
    )


SessionLocal = make_session_factory(engine)
