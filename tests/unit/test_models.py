"""Unit tests for the models module."""

from dataclasses import FrozenInstanceError

import pytest

from counterpoint.models import (
    Entity,
    GraphSnapshot,
    LineType,
    Relationship,
    RelationshipMetadata,
)


class TestLineType:
    """Tests for LineType enum."""

    def test_line_type_values(self):
        """Test LineType enum values."""
        assert LineType.MEMBERSHIP.value == "membership"
        assert LineType.STUDIO.value == "studio"
        assert LineType.WRITING.value == "writing"
        assert LineType.LABEL.value == "label"
        assert LineType.FEATURE.value == "feature"
        assert LineType.COVER.value == "cover"
        assert LineType.INFLUENCE.value == "influence"

    def test_line_type_count(self):
        """Test LineType has exactly 7 values."""
        assert len(LineType) == 7


class TestRelationship:
    """Tests for Relationship dataclass."""

    def test_relationship_defaults(self):
        """Test Relationship default metadata."""
        rel = Relationship("a", "b", LineType.STUDIO)
        assert rel.metadata == RelationshipMetadata()
        assert rel.metadata.titles == ()

    def test_pair_is_sorted(self):
        """Test pair ignores stored direction."""
        assert Relationship("b", "a", LineType.COVER).pair == ("a", "b")
        assert Relationship("a", "b", LineType.COVER).pair == ("a", "b")

    def test_touches_and_other_end(self):
        """Test endpoint helpers."""
        rel = Relationship("a", "b", LineType.LABEL)
        assert rel.touches("a")
        assert rel.touches("b")
        assert not rel.touches("c")
        assert rel.other_end("a") == "b"
        assert rel.other_end("b") == "a"
        assert rel.other_end("c") is None

    def test_relationship_is_frozen(self):
        """Test relationships cannot be mutated in place."""
        rel = Relationship("a", "b", LineType.LABEL)
        with pytest.raises(FrozenInstanceError):
            rel.source = "c"


class TestEntity:
    """Tests for Entity dataclass."""

    def test_entity_defaults(self):
        """Test Entity default values."""
        entity = Entity(id="a", name="A")
        assert entity.category == "artist"
        assert entity.origin_year is None
        assert entity.position == (0, 0)
        assert entity.hub == (0, 0)
        assert entity.potential_connections == ()
        assert entity.extra == {}

    def test_entity_is_hashable_with_extra(self):
        """Test extra data does not break hashing."""
        entity = Entity(id="a", name="A", extra={"genres": ["rock"]})
        assert hash(entity) == hash(Entity(id="a", name="A", extra={"genres": []}))


class TestGraphSnapshot:
    """Tests for GraphSnapshot dataclass."""

    def test_copy_is_independent(self):
        """Test copy produces an equal but independent snapshot."""
        snapshot = GraphSnapshot(
            entities={"a": Entity(id="a", name="A", extra={"genres": ["rock"]})},
            relationships=[Relationship("a", "b", LineType.STUDIO)],
        )
        copied = snapshot.copy()

        assert copied == snapshot
        copied.entities["a"].extra["genres"].append("pop")
        copied.relationships.clear()
        assert snapshot.entities["a"].extra["genres"] == ["rock"]
        assert len(snapshot.relationships) == 1

    def test_is_empty(self):
        """Test empty detection."""
        assert GraphSnapshot().is_empty()
        assert not GraphSnapshot(entities={"a": Entity(id="a", name="A")}).is_empty()
