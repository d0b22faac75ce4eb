import copy
from collections.abc import Callable

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from dextracker.db.database import get_session
from dextracker.main import app
from dextracker.models.db import Base
from dextracker.models.pokemon import (
    LocationRecord,
    LocationType,
    Pokemon,
    Rarity,
    TimeOfDay,
    Variant,
    VariantType,
)


def build_pokemon(
    id: int,
    name: str | None = None,
    rarity: Rarity = Rarity.COMMON,
    previous_forms: list[int] | None = None,
    locations: list[tuple[str, str, str]] | None = None,
    variants: list[VariantType] | None = None,
    caught: set[VariantType] | None = None,
) -> Pokemon:
    """Build a Pokémon from compact test data; locations are (place, type, time)."""
    caught = caught or set()
    return Pokemon(
        id=id,
        name=name or f"Pokemon {id}",
        rarity=rarity,
        previous_forms=previous_forms or [],
        locations=[
            LocationRecord(place=place, type=LocationType(type_), time=TimeOfDay(time))
            for place, type_, time in (locations or [])
        ],
        variants=[Variant(type=v, caught=v in caught) for v in (variants or [VariantType.NORMAL])],
    )


@pytest.fixture
def make_pokemon() -> Callable[..., Pokemon]:
    """Factory for compact Pokémon test data."""
    return build_pokemon


@pytest.fixture
def sample_catalogue() -> list[Pokemon]:
    """
    Small catalogue with two evolution lines and an unrelated Rare.

    Route 1 / Land / Day: Bulbasaur (Common base), Gastly (Rare base)
    Route 1 / Water / Night: Poliwag (Common base)
    Ivysaur, Venusaur and Haunter have no locations of their own.
    """
    return [
        build_pokemon(
            1,
            "Bulbasaur",
            locations=[("Route 1", "Land", "Day"), ("Viridian Forest", "Land", "Day")],
            variants=[VariantType.NORMAL, VariantType.SHINY],
        ),
        build_pokemon(
            2,
            "Ivysaur",
            previous_forms=[1],
            variants=[VariantType.NORMAL, VariantType.SHINY],
        ),
        build_pokemon(
            3,
            "Venusaur",
            previous_forms=[1, 2],
            variants=[VariantType.NORMAL],
        ),
        build_pokemon(
            60,
            "Poliwag",
            locations=[("Route 1", "Water", "Night")],
            variants=[VariantType.NORMAL, VariantType.MYSTIC],
        ),
        build_pokemon(
            92,
            "Gastly",
            rarity=Rarity.RARE,
            locations=[("Route 1", "Land", "Day"), ("Pokémon Tower", "Land", "Night")],
            variants=[VariantType.NORMAL, VariantType.SHADOW],
        ),
        build_pokemon(
            93,
            "Haunter",
            rarity=Rarity.RARE,
            previous_forms=[92],
            variants=[VariantType.NORMAL, VariantType.SHADOW],
        ),
    ]


@pytest.fixture
def sample_catalogue_data() -> list[dict]:
    """Catalogue in its JSON file shape."""
    return [
        {
            "id": 1,
            "name": "Bulbasaur",
            "rarity": "Common",
            "previousForms": [],
            "locations": [{"place": "Route 1", "type": "Land", "time": "Day"}],
            "variants": [
                {"type": "Normal", "caught": False},
                {"type": "Shiny", "caught": False},
            ],
        },
        {
            "id": 2,
            "name": "Ivysaur",
            "rarity": "Common",
            "previousForms": [1],
            "locations": [],
            "variants": [{"type": "Normal", "caught": False}],
        },
        {
            "id": 793,
            "name": "Nihilego",
            "rarity": "Ultra Beast",
            "previousForms": [],
            "locations": [{"place": "Pallet Town", "type": "Water", "time": "Night"}],
            "variants": [{"type": "Normal", "caught": True}],
        },
    ]


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session(async_engine) -> AsyncSession:
    """Provide a database session for tests."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


@pytest.fixture
async def client(
    async_engine, sample_catalogue: list[Pokemon], monkeypatch: pytest.MonkeyPatch
):
    """
    Async test client over an in-memory database.

    The catalogue source is replaced with a fresh copy of sample_catalogue
    on every acquisition.
    """
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_session():
        async with async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def fake_acquire_catalogue() -> list[Pokemon]:
        return copy.deepcopy(sample_catalogue)

    monkeypatch.setattr("dextracker.api.dependencies.acquire_catalogue", fake_acquire_catalogue)
    monkeypatch.setattr("dextracker.api.pokedex.acquire_catalogue", fake_acquire_catalogue)
    app.dependency_overrides[get_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
