"""Fixtures for id_generator contract tests."""

from collections.abc import Iterable

import pytest

from clientele.adapters.id_generators import (
    SequenceIdGenerator,
    SimpleIdGenerator,
    TsidGenerator,
    ULIDGenerator,
)
from clientele.interfaces.id_generator import IdGenerator, NumericIdGenerator


@pytest.fixture(params=["tsid", "ulid", "sequence", "simple"])
def id_generator(request: pytest.FixtureRequest) -> Iterable[IdGenerator | NumericIdGenerator]:
    """Return a fresh generator for the requested backend.

    Supported params:
      - `"tsid"` → TsidGenerator (customer ids)
      - `"ulid"` → ULIDGenerator (event ids)
      - `"sequence"` → SequenceIdGenerator
      - `"simple"` → SimpleIdGenerator
    """
    match request.param:
        case "tsid":
            yield TsidGenerator(node_id=1)
        case "ulid":
            yield ULIDGenerator()
        case "sequence":
            yield SequenceIdGenerator()
        case "simple":
            yield SimpleIdGenerator()
        case _:
            raise ValueError(f"unknown id generator type: {request.param}")


@pytest.fixture(params=["tsid", "ulid", "sequence"])
def monotonic_id_generators(request: pytest.FixtureRequest) -> Iterable[IdGenerator]:
    """Yield generators that promise increasing ids, even across threads."""
    match request.param:
        case "tsid":
            yield TsidGenerator(node_id=2)
        case "ulid":
            yield ULIDGenerator()
        case "sequence":
            yield SequenceIdGenerator()
        case _:
            raise ValueError(f"unknown monotonic id generator type: {request.param}")
