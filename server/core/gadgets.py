# server/core/gadgets.py

import random
from datetime import datetime
from typing import Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.codename import CodenameGenerator
from core.errors import (
    AlreadyDecommissioned,
    AlreadyDestroyed,
    DuplicateResource,
    InvalidTransition,
    NotFound,
    ValidationError,
)
from core.logging_conf import get_logger
from models.gadget import Gadget, GadgetStatus, utcnow


logger = get_logger(__name__)


def success_probability(rng: random.Random | None = None) -> int:
    """
    Decorative mission success percentage in [1, 100].
    Drawn fresh for every read and never stored on the gadget.
    """
    return (rng or random).randint(1, 100)


def confirmation_code(rng: random.Random | None = None) -> int:
    return (rng or random).randint(100000, 999999)


class GadgetManager:
    """
    Owns the gadget status machine.

    Available -> Deployed | Destroyed through update()
    Available | Deployed -> Destroyed through self_destruct()
    anything -> Decommissioned through decommission() only
    """

    def __init__(
        self,
        db: Session,
        codenames: CodenameGenerator,
        clock: Callable[[], datetime] = utcnow,
        rng: random.Random | None = None,
    ):
        self.db = db
        self.codenames = codenames
        self.clock = clock
        self.rng = rng or random.Random()

    # -------------------------------
    # Reads
    # -------------------------------

    def list_gadgets(self, status: GadgetStatus | str | None = None) -> list[Gadget]:
        query = self.db.query(Gadget)
        if status is not None:
            if isinstance(status, GadgetStatus):
                status = status.value
            query = query.filter(Gadget.status == status)
        return query.order_by(Gadget.created_at.asc(), Gadget.id.asc()).all()

    def get(self, gadget_id: str) -> Gadget:
        gadget = self.db.get(Gadget, gadget_id)
        if gadget is None:
            raise NotFound("Gadget not found")
        return gadget

    def codename_taken(self, codename: str) -> bool:
        return self.db.query(Gadget.id).filter(Gadget.codename == codename).first() is not None

    # -------------------------------
    # Writes
    # -------------------------------

    def _commit(self, gadget: Gadget) -> Gadget:
        self.db.commit()
        self.db.refresh(gadget)
        return gadget

    def create(self, name: str | None) -> Gadget:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Name is required")

        codename = self.codenames.generate(self.codename_taken)
        gadget = Gadget(
            name=name,
            codename=codename,
            status=GadgetStatus.AVAILABLE.value,
            created_at=self.clock(),
        )
        self.db.add(gadget)
        try:
            self.db.commit()
        except IntegrityError:
            # a concurrent create drew the same codename between check and insert
            self.db.rollback()
            logger.warning("gadget.codename_conflict", extra={"codename": codename})
            raise DuplicateResource("Codename collision, please retry")
        self.db.refresh(gadget)

        logger.info("gadget.created", extra={"gadget_id": gadget.id, "codename": codename})
        return gadget

    def update(
        self,
        gadget_id: str,
        name: str | None = None,
        status: GadgetStatus | None = None,
    ) -> Gadget:
        if status is not None:
            status = GadgetStatus(status)
            if status is GadgetStatus.DECOMMISSIONED:
                raise InvalidTransition("Use DELETE to decommission")
        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("Name must not be empty")

        gadget = self.get(gadget_id)

        if status is not None and status.value != gadget.status:
            if gadget.status == GadgetStatus.DECOMMISSIONED.value:
                raise InvalidTransition("Decommissioned gadgets cannot change status")
            # Destroyed -> Available/Deployed stays allowed; see DESIGN.md
            if status is GadgetStatus.DESTROYED and gadget.destroyed_at is None:
                gadget.destroyed_at = self.clock()
            gadget.status = status.value

        if name is not None:
            gadget.name = name

        self._commit(gadget)
        logger.info("gadget.updated", extra={"gadget_id": gadget.id, "status": gadget.status})
        return gadget

    def decommission(self, gadget_id: str) -> Gadget:
        """
        Applies unconditionally, also to destroyed or already decommissioned
        gadgets. Unlike self_destruct() there is no guard here. The first
        decommission timestamp is kept on repeats.
        """
        gadget = self.get(gadget_id)
        gadget.status = GadgetStatus.DECOMMISSIONED.value
        if gadget.decommissioned_at is None:
            gadget.decommissioned_at = self.clock()

        self._commit(gadget)
        logger.info("gadget.decommissioned", extra={"gadget_id": gadget.id})
        return gadget

    def self_destruct(self, gadget_id: str) -> tuple[Gadget, int]:
        gadget = self.get(gadget_id)
        if gadget.status == GadgetStatus.DECOMMISSIONED.value:
            raise AlreadyDecommissioned()
        if gadget.status == GadgetStatus.DESTROYED.value:
            raise AlreadyDestroyed()

        code = confirmation_code(self.rng)
        gadget.status = GadgetStatus.DESTROYED.value
        if gadget.destroyed_at is None:
            gadget.destroyed_at = self.clock()

        self._commit(gadget)
        logger.info("gadget.self_destructed", extra={"gadget_id": gadget.id})
        return gadget, code
