# server/core/codename.py

import random
from typing import Callable, Sequence

from core.config import DEFAULT_CODENAME_POOL
from core.errors import CodenameExhausted
from core.logging_conf import get_logger


logger = get_logger(__name__)


def format_codename(name: str) -> str:
    return f"The {name}"


class CodenameGenerator:
    """
    Draws "The {Name}" codenames from a fixed pool until one is not taken.

    `is_taken` must look at every gadget ever created, not only active ones.
    The lookup is a pre-filter: the unique constraint on gadgets.codename
    still decides when two requests race on the same draw.

    Retries stop after `max_attempts` draws. Once every pool name is in use
    no draw can succeed, so widen the pool (CODENAME_POOL) as volume grows.
    """

    def __init__(
        self,
        pool: Sequence[str] = DEFAULT_CODENAME_POOL,
        max_attempts: int = 100,
        rng: random.Random | None = None,
    ):
        if not pool:
            raise ValueError("codename pool must not be empty")
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.pool = list(pool)
        self.max_attempts = max_attempts
        self.rng = rng or random.Random()

    def generate(self, is_taken: Callable[[str], bool]) -> str:
        for attempt in range(1, self.max_attempts + 1):
            codename = format_codename(self.rng.choice(self.pool))
            if not is_taken(codename):
                return codename
            logger.debug("codename.collision", extra={"codename": codename, "attempt": attempt})

        logger.warning(
            "codename.exhausted",
            extra={"attempts": self.max_attempts, "pool_size": len(self.pool)},
        )
        raise CodenameExhausted()
