"""Unit tests for the graph module."""

import pytest

from counterpoint import DuplicateEntityError, UnknownEntityError
from counterpoint.graph import GraphStore
from counterpoint.models import Entity, GraphSnapshot, LineType, Relationship


class TestAddEntity:
    """Tests for GraphStore.add_entity."""

    def test_add_entity(self, store, make_entity):
        """Add an entity with relationships."""
        store.add_entity(make_entity("a"))
        store.add_entity(
            make_entity("b"), [Relationship("b", "a", LineType.MEMBERSHIP)]
        )
        assert "a" in store
        assert "b" in store
        assert len(store) == 2
        assert store.relationships == [Relationship("b", "a", LineType.MEMBERSHIP)]

    def test_relationships_keep_insertion_order(self, store, make_entity):
        """Relationships are appended in the order supplied."""
        first = Relationship("a", "b", LineType.STUDIO)
        second = Relationship("a", "b", LineType.STUDIO)
        third = Relationship("b", "a", LineType.COVER)
        store.add_entity(make_entity("a"), [first])
        store.add_entity(make_entity("b"), [second, third])
        assert store.relationships == [first, second, third]

    def test_duplicate_entity_raises(self, store, make_entity):
        """Adding an existing id raises and changes nothing."""
        store.add_entity(make_entity("a"))
        with pytest.raises(DuplicateEntityError) as excinfo:
            store.add_entity(
                make_entity("a", name="Other"),
                [Relationship("a", "b", LineType.STUDIO)],
            )
        assert excinfo.value.entity_id == "a"
        assert store.get_entity("a").name == "A"
        assert store.relationships == []

    def test_dangling_relationships_are_tolerated(self, store, make_entity):
        """Relationships may name entities that are not in the store."""
        store.add_entity(make_entity("a"), [Relationship("a", "x", LineType.COVER)])
        assert len(store.relationships) == 1


class TestRemoveEntity:
    """Tests for GraphStore.remove_entity."""

    def test_cascade_removal(self, triangle_store):
        """Removing an entity removes exactly the relationships naming it."""
        assert triangle_store.remove_entity("a") is True
        assert "a" not in triangle_store
        assert triangle_store.relationships == [
            Relationship("b", "c", LineType.WRITING)
        ]

    def test_remove_unknown_is_noop(self, triangle_store):
        """Removing an unknown id returns False and changes nothing."""
        before = triangle_store.get_snapshot()
        assert triangle_store.remove_entity("zzz") is False
        assert triangle_store.get_snapshot() == before

    def test_clear(self, triangle_store):
        """Clear empties the store."""
        triangle_store.clear()
        assert len(triangle_store) == 0
        assert triangle_store.relationships == []


class TestReplaceEntity:
    """Tests for full-entity replacement."""

    def test_replace_entity(self, store, make_entity):
        """Replace swaps the stored value."""
        store.add_entity(make_entity("a"))
        store.replace_entity(make_entity("a", name="Renamed"))
        assert store.get_entity("a").name == "Renamed"

    def test_replace_unknown_raises(self, store, make_entity):
        """Replacing a missing entity raises UnknownEntityError."""
        with pytest.raises(UnknownEntityError):
            store.replace_entity(make_entity("a"))

    def test_set_positions(self, store, make_entity):
        """Positions are applied by replacement; unknown ids are ignored."""
        store.add_entity(make_entity("a"))
        original = store.get_entity("a")
        store.set_positions({"a": (4, -1), "zzz": (1, 1)})
        assert store.get_entity("a").position == (4, -1)
        assert original.position == (0, 0)


class TestSnapshots:
    """Tests for snapshot capture and restore."""

    def test_snapshot_is_deep_copy(self, store, make_entity):
        """Mutating a snapshot does not affect the store."""
        store.add_entity(make_entity("a", extra={"genres": ["jazz"]}))
        snapshot = store.get_snapshot()
        snapshot.entities["a"].extra["genres"].append("funk")
        snapshot.relationships.append(Relationship("a", "b", LineType.COVER))

        assert store.get_entity("a").extra["genres"] == ["jazz"]
        assert store.relationships == []

    def test_restore_round_trip(self, triangle_store):
        """Restore brings back an equal, independent state."""
        snapshot = triangle_store.get_snapshot()
        other = GraphStore()
        other.restore(snapshot)
        assert other.get_snapshot() == snapshot

        snapshot.relationships.clear()
        assert len(other.relationships) == 3

    def test_store_from_snapshot(self, triangle_store):
        """A store can be built from a snapshot."""
        copy = GraphStore(triangle_store.get_snapshot())
        assert copy.get_snapshot() == triangle_store.get_snapshot()

    def test_empty_snapshot(self, store):
        """Empty store snapshots compare equal to GraphSnapshot()."""
        assert store.get_snapshot() == GraphSnapshot()


class TestPairsAndNetworkx:
    """Tests for pair lookup and the networkx view."""

    def test_has_pair(self, triangle_store):
        """has_pair is undirected and optionally typed."""
        assert triangle_store.has_pair("a", "b")
        assert triangle_store.has_pair("b", "a")
        assert triangle_store.has_pair("a", "c", LineType.LABEL)
        assert not triangle_store.has_pair("a", "c", LineType.STUDIO)
        assert not triangle_store.has_pair("a", "zzz")

    def test_to_networkx(self, store):
        """The multigraph keeps parallel edges and skips dangling ones."""
        store.add_entity(Entity(id="a", name="A"))
        store.add_entity(
            Entity(id="b", name="B"),
            [
                Relationship("a", "b", LineType.STUDIO),
                Relationship("b", "a", LineType.COVER),
                Relationship("b", "x", LineType.LABEL),
            ],
        )
        graph = store.to_networkx()
        assert set(graph.nodes) == {"a", "b"}
        assert graph.number_of_edges("a", "b") == 2
        assert graph.number_of_edges() == 2
        assert graph.edges["a", "b", 1]["relationship"].type == LineType.COVER
