"""Tests for snapshot capture and snapshot models."""

import pytest

from design_drift.exceptions import RemoteAPIError
from design_drift.snapshot import (
    EntityCategory,
    RevisionRecord,
    Snapshot,
    build_snapshot,
    iter_component_nodes,
    load_variables,
)
from design_drift.snapshot.fingerprint import fingerprint

from conftest import make_component, make_revision


class TestComponentTraversal:
    def test_document_order(self, document):
        ids = [n["id"] for n in iter_component_nodes(document)]
        assert ids == ["1:1", "1:2", "1:3"]

    def test_deep_nesting(self):
        leaf = make_component("deep", "Deep")
        node = leaf
        for depth in range(2000):
            node = {"id": f"f{depth}", "type": "FRAME", "children": [node]}
        assert [n["id"] for n in iter_component_nodes(node)] == ["deep"]

    def test_missing_children_and_empty_root(self):
        assert list(iter_component_nodes({"id": "0", "type": "FRAME"})) == []
        assert list(iter_component_nodes({"id": "0", "type": "FRAME", "children": None})) == []
        assert list(iter_component_nodes(None)) == []

    def test_siblings_after_subtree(self):
        tree = {
            "id": "root",
            "type": "DOCUMENT",
            "children": [
                {"id": "a", "type": "FRAME", "children": [make_component("a1", "A1")]},
                make_component("b", "B"),
            ],
        }
        assert [n["id"] for n in iter_component_nodes(tree)] == ["a1", "b"]


class TestBuildSnapshot:
    def test_all_categories(self, document, styles, variables):
        snap = build_snapshot(document, styles, variables)
        assert set(snap.components) == {"1:1", "1:2", "1:3"}
        assert set(snap.styles) == {"S:1", "S:2"}
        assert set(snap.variables) == {"V:1"}
        assert snap.component_names["1:2"] == "Input"
        assert snap.style_names["S:2"] == "Heading"
        assert snap.variable_names["V:1"] == "color/brand"

    def test_name_and_fingerprint_maps_share_keys(self, document, styles, variables):
        snap = build_snapshot(document, styles, variables)
        for category in EntityCategory:
            assert set(snap.fingerprints(category)) == set(snap.names(category))

    def test_nameless_entity_falls_back_to_id(self):
        snap = build_snapshot({"id": "x", "type": "COMPONENT"}, [], [])
        assert snap.component_names == {"x": "x"}

    def test_meta_has_capture_time_only(self, document, styles):
        snap = build_snapshot(document, styles, [])
        assert snap.meta.taken_at
        assert snap.meta.version_id is None

    @pytest.mark.parametrize("source", [None, []])
    def test_degraded_variables(self, document, styles, source):
        snap = build_snapshot(document, styles, source)
        assert snap.variables == {}
        assert snap.variable_names == {}

    def test_geometry_change_keeps_fingerprint(self, document, styles):
        before = build_snapshot(document, styles, [])
        document["children"][0]["children"][0]["absoluteBoundingBox"]["x"] = 500
        after = build_snapshot(document, styles, [])
        assert before.components == after.components

    def test_fingerprint_matches_engine(self):
        snap = build_snapshot(None, [{"node_id": "S:1", "name": "P", "style_type": "FILL"}], None)
        assert snap.styles["S:1"] == fingerprint({"id": "S:1", "name": "P", "style_type": "FILL"})


class TestLoadVariables:
    def test_passes_through(self, variables):
        assert load_variables(lambda: variables) == variables

    def test_forbidden_degrades(self, forbidden):
        def fetch():
            raise forbidden

        assert load_variables(fetch) is None

    def test_other_errors_propagate(self):
        def fetch():
            raise RemoteAPIError("/files/F/variables/local", 500, reason="Server Error")

        with pytest.raises(RemoteAPIError):
            load_variables(fetch)

    def test_forbidden_text_without_status_propagates(self):
        def fetch():
            raise RemoteAPIError("/files/F/variables/local", None, reason="403 Forbidden")

        with pytest.raises(RemoteAPIError):
            load_variables(fetch)


class TestSnapshotModel:
    def test_stamp_revision(self):
        snap = build_snapshot(None, [], None)
        snap.stamp_revision(make_revision("R9", label="v9"))
        assert snap.meta.version_id == "R9"
        assert snap.meta.version_label == "v9"
        assert snap.meta.version_user_handle == "alice"
        assert snap.meta.version_created_at.startswith("2025-03-01T09:00")

    def test_stamp_none_is_noop(self):
        snap = build_snapshot(None, [], None)
        snap.stamp_revision(None)
        assert snap.meta.version_id is None

    def test_dict_roundtrip(self, document, styles, variables):
        snap = build_snapshot(document, styles, variables)
        assert Snapshot.from_dict(snap.to_dict()) == snap

    def test_from_dict_without_name_maps(self):
        snap = Snapshot.from_dict({"components": {"a": "h"}, "styles": {}, "variables": {},
                                   "meta": {"version_id": "R1", "taken_at": "t"}})
        assert snap.component_names == {}
        assert snap.name_of(EntityCategory.COMPONENT, "a") == "a"


class TestRevisionRecord:
    def test_from_raw(self):
        rev = RevisionRecord.from_raw({
            "id": "123",
            "created_at": "2025-03-01T09:00:00Z",
            "label": "",
            "description": "Tweaks",
            "user": {"handle": "bob", "id": "42"},
        })
        assert rev.created_at.utcoffset().total_seconds() == 0
        assert rev.label is None
        assert rev.description == "Tweaks"
        assert rev.author == "bob"

    def test_author_falls_back_to_user_id(self):
        rev = RevisionRecord.from_raw({"id": "1", "created_at": "2025-03-01T09:00:00", "user": {"id": "42"}})
        assert rev.author == "42"
        assert rev.created_at.tzinfo is not None

    def test_unparseable_timestamp(self):
        with pytest.raises(ValueError):
            RevisionRecord.from_raw({"id": "1", "created_at": "yesterday"})
