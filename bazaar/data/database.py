# bazaar/data/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from bazaar.utils.settings import DATABASE_URL, SQL_ECHO

engine = create_engine(DATABASE_URL, echo=SQL_ECHO, pool_pre_ping=True)

SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

Base = declarative_base()


def init_db(bind=None):
    #import modeli rejestruje tabele w Base.metadata
    import bazaar.data.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def get_db():
    """Jedna sesja (storage context) na request, zamykana po odpowiedzi."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
