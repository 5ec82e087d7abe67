from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from madarik_identity.adapter.services.bcrypt_password_hasher import BcryptPasswordHasher
from madarik_identity.adapter.services.resend_mail_transport import ResendMailTransport
from madarik_identity.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from madarik_identity.api.utils.rate_limit import LoginThrottle
from madarik_identity.app.services.clock import IClock, SystemClock
from madarik_identity.app.services.identity_service import IdentityService
from madarik_identity.app.services.mail_transport import IMailTransport
from madarik_identity.app.services.password_hasher import IPasswordHasher
from madarik_identity.app.services.session_issuer import SessionIssuer
from madarik_identity.app.services.settings import IdentitySettings
from madarik_identity.app.services.unit_of_work import UnitOfWork

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

settings = IdentitySettings.from_config(ApplicationConfig)
password_hasher = BcryptPasswordHasher()
system_clock = SystemClock()
mail_transport = ResendMailTransport(
    api_key=ApplicationConfig.RESEND_API_KEY,
    from_email=ApplicationConfig.FROM_EMAIL,
    from_name=ApplicationConfig.FROM_NAME,
    api_url=ApplicationConfig.RESEND_API_URL,
    timeout=ApplicationConfig.MAIL_TIMEOUT_SECONDS,
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_clock() -> IClock:
    return system_clock


def get_mail_transport() -> IMailTransport:
    return mail_transport


def get_password_hasher() -> IPasswordHasher:
    return password_hasher


def get_settings() -> IdentitySettings:
    return settings


def get_login_throttle(request: Request) -> LoginThrottle:
    return request.app.state.login_throttle


def get_session_issuer(clock: IClock = Depends(get_clock)) -> SessionIssuer:
    return SessionIssuer(ApplicationConfig.JWT_SECRET, settings.session_ttl, clock)


def get_identity_service(
    uow: UnitOfWork = Depends(get_unit_of_work),
    mail: IMailTransport = Depends(get_mail_transport),
    clock: IClock = Depends(get_clock),
    hasher: IPasswordHasher = Depends(get_password_hasher),
    session_issuer: SessionIssuer = Depends(get_session_issuer),
    identity_settings: IdentitySettings = Depends(get_settings),
) -> IdentityService:
    """One IdentityService per request, sharing the request's unit of work"""
    return IdentityService(uow, mail, clock, hasher, session_issuer, identity_settings)
