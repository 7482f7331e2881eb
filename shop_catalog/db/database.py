from typing import Any, Dict, Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from shop_catalog.settings.db_settings import settings

Base = declarative_base()

connect_args: Dict[str, Any] = {}
if settings.SYNC_DATABASE_URL.startswith("sqlite"):
    # сессии живут в потоках FastAPI, а не в потоке создания
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.SYNC_DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.DB_ECHO,
    connect_args=connect_args,
    future=True,
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
