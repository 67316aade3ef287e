import os

# przed importem bazaar: silnik z settings nie moze wymagac postgresa
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from bazaar.api.deps import get_lock_service
from bazaar.data.database import Base, get_db, init_db
from bazaar.data.models.product import ProductModel
from bazaar.data.models.user import UserModel
from bazaar.main import create_app
from bazaar.services.lock_service import LockService


class FakeRedis:
    """Tylko SET NX EX i EVAL skryptu zwalniajacego, tyle ile uzywa LockService."""

    def __init__(self):
        self.store = {}

    def set(self, name, value, nx=False, ex=None):
        if nx and name in self.store:
            return None
        self.store[name] = value
        return True

    def eval(self, script, numkeys, key, token):
        if self.store.get(key) == token:
            del self.store[key]
            return 1
        return 0


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def fake_redis():
    return FakeRedis()


@pytest.fixture()
def lock_service(fake_redis):
    return LockService(client=fake_redis)


@pytest.fixture()
def client(session_factory, lock_service):
    app = create_app()

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_lock_service] = lambda: lock_service
    return TestClient(app)


@pytest.fixture()
def make_user(db_session):
    def _make_user(username, role="vendor", **kwargs):
        user = UserModel(
            username=username,
            name=kwargs.pop("name", username.title()),
            mobile=kwargs.pop("mobile", "9000000000"),
            role=role,
            **kwargs,
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture()
def make_product(db_session):
    def _make_product(wholesaler, name, price, **kwargs):
        product = ProductModel(
            name=name,
            category=kwargs.pop("category", "vegetables"),
            price=Decimal(price),
            unit=kwargs.pop("unit", "kg"),
            wholesaler_id=wholesaler.id if wholesaler is not None else None,
            **kwargs,
        )
        db_session.add(product)
        db_session.commit()
        return product

    return _make_product
