# server/models/gadget.py

import uuid
from enum import Enum
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime
from sqlalchemy.types import TypeDecorator
from . import Base


class GadgetStatus(str, Enum):
    AVAILABLE = "Available"
    DEPLOYED = "Deployed"
    DESTROYED = "Destroyed"
    DECOMMISSIONED = "Decommissioned"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class UTCDateTime(TypeDecorator):
    """
    Stores naive UTC and loads aware UTC, since SQLite keeps no offset.
    Naive values on the way in are taken to be UTC already.
    """
    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is not None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class Gadget(Base):
    __tablename__ = "gadgets"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    # unique over every gadget ever created, decommissioned and destroyed ones included
    codename = Column(String, unique=True, index=True, nullable=False)
    status = Column(String, index=True, nullable=False, default=GadgetStatus.AVAILABLE.value)
    created_at = Column(UTCDateTime, nullable=False, default=utcnow)
    destroyed_at = Column(UTCDateTime, nullable=True)
    decommissioned_at = Column(UTCDateTime, nullable=True)
