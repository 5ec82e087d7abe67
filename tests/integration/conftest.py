import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from madarik_identity.adapter.services.bcrypt_password_hasher import BcryptPasswordHasher
from madarik_identity.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from madarik_identity.api.app import create_app
from madarik_identity.depends import (
    get_clock,
    get_mail_transport,
    get_password_hasher,
    get_unit_of_work,
)
from madarik_identity.domain.base import utcnow
from madarik_identity.domain.entities import User, UserRole
from tests.fixtures.api_client import ADMIN_EMAIL, ADMIN_PASSWORD, login
from tests.fixtures.fakes import FakeClock, OutboxMailTransport

# Low cost factor keeps the suite fast; production uses 12
hasher = BcryptPasswordHasher(rounds=4)


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def clock():
    return FakeClock()


@pytest_asyncio.fixture
async def outbox():
    return OutboxMailTransport()


@pytest_asyncio.fixture
async def client(db_session, clock, outbox):
    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_mail_transport] = lambda: outbox
    app.dependency_overrides[get_password_hasher] = lambda: hasher

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def admin_user(db_session):
    admin = User(
        email=ADMIN_EMAIL,
        password_hash=hasher.hash(ADMIN_PASSWORD),
        role=UserRole.ADMIN,
        email_verified_at=utcnow(),
    )
    db_session.add(admin)
    await db_session.commit()
    # Detach so rollbacks on the shared session don't expire the test's handle
    db_session.expunge(admin)
    return admin


@pytest_asyncio.fixture
async def admin_headers(client, admin_user):
    return await login(client, ADMIN_EMAIL, ADMIN_PASSWORD)

