"""Tests for the codename generator."""

import random

import pytest

from core.codename import CodenameGenerator, format_codename
from core.config import DEFAULT_CODENAME_POOL
from core.errors import CodenameExhausted


POOL_CODENAMES = {format_codename(name) for name in DEFAULT_CODENAME_POOL}


def test_generates_codename_from_pool():
    generator = CodenameGenerator(rng=random.Random(1))
    codename = generator.generate(lambda c: False)
    assert codename in POOL_CODENAMES
    assert codename.startswith("The ")


def test_redraws_until_codename_is_free():
    taken = POOL_CODENAMES - {"The Kraken"}
    seen = []

    def is_taken(codename):
        seen.append(codename)
        return codename in taken

    generator = CodenameGenerator(rng=random.Random(7), max_attempts=1000)
    assert generator.generate(is_taken) == "The Kraken"
    assert seen[-1] == "The Kraken"
    assert all(c in taken for c in seen[:-1])


def test_gives_up_after_max_attempts():
    calls = []

    def is_taken(codename):
        calls.append(codename)
        return True

    generator = CodenameGenerator(max_attempts=25)
    with pytest.raises(CodenameExhausted):
        generator.generate(is_taken)
    assert len(calls) == 25


def test_custom_pool():
    generator = CodenameGenerator(pool=["Mongoose"])
    assert generator.generate(lambda c: False) == "The Mongoose"


def test_rejects_empty_pool_and_bad_attempts():
    with pytest.raises(ValueError):
        CodenameGenerator(pool=[])
    with pytest.raises(ValueError):
        CodenameGenerator(max_attempts=0)
