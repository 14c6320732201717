"""Pytest configuration and shared fixtures for Counterpoint tests."""

import pytest

from counterpoint import (
    Entity,
    GraphStore,
    LineType,
    Relationship,
    RelationshipMetadata,
    TransitMap,
)


@pytest.fixture
def make_entity():
    """Factory for entities with sensible defaults."""

    def _make(entity_id, year=None, **kwargs):
        kwargs.setdefault("name", entity_id.title())
        return Entity(id=entity_id, origin_year=year, **kwargs)

    return _make


@pytest.fixture
def membership():
    """Factory for membership relationships."""

    def _make(source, target, role="Member"):
        return Relationship(
            source, target, LineType.MEMBERSHIP, RelationshipMetadata(role=role)
        )

    return _make


@pytest.fixture
def store():
    """Empty graph store."""
    return GraphStore()


@pytest.fixture
def triangle_store(make_entity):
    """Store with A-B, B-C and A-C relationships."""
    graph = GraphStore()
    graph.add_entity(make_entity("a", 1960))
    graph.add_entity(
        make_entity("b", 1965), [Relationship("a", "b", LineType.STUDIO)]
    )
    graph.add_entity(
        make_entity("c", 1970),
        [
            Relationship("b", "c", LineType.WRITING),
            Relationship("c", "a", LineType.LABEL),
        ],
    )
    return graph


@pytest.fixture
def transit_map():
    """Default TransitMap instance."""
    return TransitMap()
