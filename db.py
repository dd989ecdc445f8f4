from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base

Base = declarative_base()


def make_engine(url: str, **kwargs):
    return create_async_engine(url, future=True, **kwargs)


def make_session_factory(engine):
    return sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
