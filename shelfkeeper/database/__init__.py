from shelfkeeper.database.base import Base
from shelfkeeper.database.engine import build_engine, engine
from shelfkeeper.database.session import SessionLocal, make_session_factory

__all__ = ["Base", "build_engine", "engine", "make_session_factory", "SessionLocal"]
