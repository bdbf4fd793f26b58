import json

import pytest
from fieldpath.defaults import default_lines, default_settings, default_shapes, default_start_point
from fieldpath.models import HeadingMode, Vec2
from fieldpath.protocol import document
from fieldpath.utils.errors import InvalidInputError

SAVED = {
    "startPoint": {"x": 56, "y": 8, "heading": "linear", "startDeg": 90, "endDeg": 180},
    "lines": [
        {
            "name": "Path 1",
            "endPoint": {"x": 56, "y": 36, "heading": "tangential", "reverse": True},
            "controlPoints": [{"x": 70, "y": 20}],
            "color": "#5a9bd5",
            "eventMarkers": [{"id": "e1", "name": "intake", "position": 0.5, "lineIndex": 0}],
            "locked": False,
        },
        {
            "endPoint": {"x": 80, "y": 60, "heading": "constant", "degrees": 45},
            "controlPoints": [],
            "color": "#aa0000",
        },
    ],
    "shapes": [
        {"id": "s1", "name": "Crate", "vertices": [{"x": 0, "y": 0}, {"x": 5, "y": 0}, {"x": 5, "y": 5}]},
    ],
    "settings": {"rWidth": 14, "rHeight": 15, "safetyMargin": 2, "optimizationQuality": 5, "fieldMap": "centerstage.webp"},
}


def test_decode_document_maps_every_section():
    traj = document.decode_document(SAVED)

    assert traj.start_point.mode is HeadingMode.LINEAR
    assert (traj.start_point.start_deg, traj.start_point.end_deg) == (90.0, 180.0)

    first, second = traj.lines
    assert first.end_point.mode is HeadingMode.TANGENTIAL
    assert first.end_point.reverse is True
    assert first.control_points == (Vec2(70.0, 20.0),)
    assert first.event_markers[0].name == "intake"
    assert first.event_markers[0].line_index == 0
    assert second.end_point.degrees == 45.0
    assert second.name is None

    assert traj.shapes[0].name == "Crate"
    assert len(traj.shapes[0].vertices) == 3

    s = traj.settings
    assert (s.r_width, s.r_height, s.safety_margin, s.optimization_quality) == (14.0, 15.0, 2.0, 5)
    # Unspecified keys fall back to defaults; unknown keys are carried along
    assert s.k_friction == default_settings().k_friction
    assert s.extra == {"fieldMap": "centerstage.webp"}


def test_encode_document_round_trips_through_json():
    traj = document.decode_document(SAVED)
    again = document.loads(document.dumps(traj))
    assert again == traj

    encoded = document.encode_document(traj)
    assert encoded["lines"][0]["eventMarkers"][0]["lineIndex"] == 0
    assert encoded["settings"]["fieldMap"] == "centerstage.webp"
    assert "degrees" not in encoded["startPoint"]


def test_optional_sections_default():
    traj = document.decode_document({"startPoint": SAVED["startPoint"], "lines": []})
    assert traj.lines == ()
    assert traj.shapes == ()
    assert traj.settings == default_settings()


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"lines": []},
        {"startPoint": {"x": 1, "y": 2, "heading": "spin"}, "lines": []},
        {"startPoint": {"x": 1, "y": 2, "heading": "linear", "startDeg": 0}, "lines": []},
        {"startPoint": {"x": "a", "y": 2, "heading": "constant", "degrees": 0}, "lines": []},
        {"startPoint": SAVED["startPoint"], "lines": {}},
        {"startPoint": SAVED["startPoint"], "lines": [], "shapes": [{"id": "x", "vertices": [{"x": 0, "y": 0}]}]},
    ],
)
def test_malformed_documents_raise_invalid_input(payload):
    with pytest.raises(InvalidInputError):
        document.decode_document(payload)


def test_marker_position_must_be_fraction():
    line = json.loads(json.dumps(SAVED["lines"][0]))
    line["eventMarkers"][0]["position"] = 1.5
    with pytest.raises(InvalidInputError):
        document.decode_line(line)


def test_loads_rejects_bad_json():
    with pytest.raises(InvalidInputError):
        document.loads("{not json")


def test_defaults_form_a_valid_document():
    traj = document.Trajectory(
        start_point=default_start_point(),
        lines=tuple(default_lines()),
        shapes=tuple(default_shapes()),
    )
    payload = document.encode_document(traj)
    assert set(payload) == {"startPoint", "lines", "shapes", "settings"}
    assert [s["name"] for s in payload["shapes"]] == ["Red Goal", "Blue Goal"]
