"""Shared fixtures for Design Drift tests."""

from datetime import datetime, timedelta, timezone

import pytest

from design_drift.config import WatcherConfig
from design_drift.exceptions import RemoteAPIError
from design_drift.snapshot.models import RevisionRecord


def make_revision(rev_id, minutes=0, handle="alice", label=None):
    return RevisionRecord(
        id=rev_id,
        created_at=datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc) + timedelta(minutes=minutes),
        user_handle=handle,
        user_id="u-1",
        label=label,
    )


def make_component(node_id, name, **fields):
    node = {"id": node_id, "name": name, "type": "COMPONENT"}
    node.update(fields)
    return node


class FakeFigmaClient:
    """In-memory stand-in for FigmaClient."""

    def __init__(self, document=None, styles=None, variables=None, revisions=None,
                 variables_error=None, file_key="FILE123"):
        self.file_key = file_key
        self.document = document or {"id": "0:0", "type": "DOCUMENT", "children": []}
        self.styles = styles or []
        self.variables = variables or []
        self.revisions = revisions or []
        self.variables_error = variables_error
        self.calls = []

    def get_versions(self):
        self.calls.append("versions")
        return list(self.revisions)

    def get_file(self):
        self.calls.append("file")
        return self.document

    def get_styles(self):
        self.calls.append("styles")
        return list(self.styles)

    def get_local_variables(self):
        self.calls.append("variables")
        if self.variables_error is not None:
            raise self.variables_error
        return list(self.variables)


class RecordingNotifier:
    channel = "recording"

    def __init__(self):
        self.sent = []

    def send(self, notification):
        self.sent.append(notification)


@pytest.fixture
def revisions():
    """R5..R1, newest first as delivered by the versions endpoint."""
    return [make_revision(f"R{i}", minutes=i * 10) for i in (5, 4, 3, 2, 1)]


@pytest.fixture
def document():
    return {
        "id": "0:0",
        "type": "DOCUMENT",
        "children": [
            {
                "id": "1:0",
                "type": "CANVAS",
                "name": "Page 1",
                "children": [
                    make_component(
                        "1:1",
                        "Button",
                        fills=[{"type": "SOLID", "color": {"r": 1, "g": 0, "b": 0, "a": 1}}],
                        absoluteBoundingBox={"x": 0, "y": 0, "width": 10, "height": 10},
                    ),
                    {
                        "id": "1:2",
                        "type": "COMPONENT_SET",
                        "name": "Input",
                        "children": [make_component("1:3", "Input/Default")],
                    },
                    {"id": "1:4", "type": "FRAME", "name": "Scratch"},
                ],
            },
        ],
    }


@pytest.fixture
def styles():
    return [
        {"node_id": "S:1", "name": "Primary", "style_type": "FILL"},
        {"node_id": "S:2", "name": "Heading", "style_type": "TEXT"},
    ]


@pytest.fixture
def variables():
    return [
        {
            "id": "V:1",
            "name": "color/brand",
            "variableCollectionId": "C:1",
            "scopes": ["ALL_FILLS"],
            "valuesByMode": {"m1": {"r": 0, "g": 0, "b": 1, "a": 1}},
        },
    ]


@pytest.fixture
def forbidden():
    return RemoteAPIError("/files/FILE123/variables/local", 403, reason="Forbidden")


@pytest.fixture
def config(tmp_path):
    return WatcherConfig(
        figma_token="token",
        figma_file_key="FILE123",
        snapshot_path=str(tmp_path / "snapshot.json"),
        display_timezone="UTC",
    )
