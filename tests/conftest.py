"""
Shared fixtures: declarative models and in-memory SQLite sessions.
"""

from typing import Optional

import pytest
from sqlalchemy import BigInteger, Integer, String, create_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column

from modules.next_value import SkipField


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False, info={"next": "snowflake"})
    display_id: Mapped[Optional[str]] = mapped_column(String(20), info={"next": "display_id"})
    name: Mapped[str] = mapped_column(String(50))


class ShortKeyUser(Base):
    __tablename__ = "short_key_users"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False, info={"n": "snowflake"})
    display_id: Mapped[Optional[str]] = mapped_column(String(20), info={"n": "display_id"})
    name: Mapped[str] = mapped_column(String(50))


class Voucher(Base):
    __tablename__ = "vouchers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    code: Mapped[Optional[str]] = mapped_column(String(20), default="FREE", info={"NEXT": "display_id"})


class Membership(Base):
    __tablename__ = "memberships"

    tenant_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    id: Mapped[int] = mapped_column(Integer, primary_key=True, info={"next": "snowflake"})


class Link(Base):
    __tablename__ = "links"

    left_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    right_id: Mapped[int] = mapped_column(Integer, primary_key=True)


# ==============================================================================
# GENERATORS
# ==============================================================================

SNOWFLAKE_ID = 750350266425
DISPLAY_ID = "20220101A01"


def snowflake(has_default_value: bool, zero: bool) -> int:
    if not zero:
        raise SkipField()
    return SNOWFLAKE_ID


def display_id(has_default_value: bool, zero: bool) -> str:
    if has_default_value or not zero:
        raise SkipField()
    return DISPLAY_ID


class IDSequence:
    """In-memory counter standing in for a distributed ID service."""

    def __init__(self):
        self.seq = 0

    def next(self, has_default_value: bool, zero: bool) -> int:
        if not zero:
            raise SkipField()
        self.seq += 1
        return self.seq


class DisplayIDSequence:
    def __init__(self):
        self.seq = 0

    def next(self, has_default_value: bool, zero: bool) -> str:
        if has_default_value or not zero:
            raise SkipField()
        self.seq += 1
        return f"20220101A{self.seq:02d}"


# ==============================================================================
# FIXTURES
# ==============================================================================

@pytest.fixture
def engine():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session
