"""Tests for the eight-point direction window table and lookup."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import numpy as np
import pytest

from core.compass.direction_classifier import (
    DIRECTION_WINDOWS,
    UNKNOWN_DIRECTION,
    DirectionClassifier,
    DirectionWindow,
    build_direction_windows,
    classify_degrees,
    validate_direction_windows,
)

LABELS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")


def test_window_table_layout():
    assert [w.label for w in DIRECTION_WINDOWS] == list(LABELS)

    north = DIRECTION_WINDOWS[0]
    assert (north.lower, north.upper) == (337.5, 22.5)
    assert north.wraps

    east = DIRECTION_WINDOWS[2]
    assert (east.lower, east.upper) == (67.5, 112.5)
    assert not east.wraps

    north_west = DIRECTION_WINDOWS[-1]
    assert (north_west.lower, north_west.upper) == (292.5, 337.5)

    assert all(w.width == 45.0 for w in DIRECTION_WINDOWS)


def test_every_degree_has_a_label():
    for degrees in np.arange(0.0, 360.0, 0.05):
        assert classify_degrees(float(degrees)) in LABELS


@pytest.mark.parametrize(
    "degrees, expected",
    [
        (0.0, "N"),
        (359.9, "N"),
        (337.5, "N"),
        (22.5, "N"),
        (22.6, "NE"),
        (45.0, "NE"),
        (67.5, "E"),
        (90.0, "E"),
        (112.5, "E"),
        (112.6, "SE"),
        (157.5, "S"),
        (180.0, "S"),
        (202.5, "S"),
        (247.5, "W"),
        (270.0, "W"),
        (292.5, "W"),
        (300.0, "NW"),
    ],
)
def test_classify_boundaries(degrees, expected):
    assert classify_degrees(degrees) == expected


def test_exactly_360_is_north():
    assert classify_degrees(360.0) == "N"


def test_nan_returns_sentinel():
    assert classify_degrees(float("nan")) == UNKNOWN_DIRECTION


def test_custom_four_point_table():
    windows = build_direction_windows(((0.0, "N"), (90.0, "E"), (180.0, "S"), (270.0, "W")))
    assert [(w.lower, w.upper) for w in windows] == [(315.0, 45.0), (45.0, 135.0), (135.0, 225.0), (225.0, 315.0)]

    classifier = DirectionClassifier(windows)
    assert classifier.labels == ("N", "E", "S", "W")
    assert classifier.classify(350.0) == "N"
    assert classifier.classify(100.0) == "E"


def test_build_rejects_unordered_points():
    with pytest.raises(ValueError):
        build_direction_windows(((90.0, "E"), (0.0, "N")))


def test_build_rejects_out_of_range_bearing():
    with pytest.raises(ValueError):
        build_direction_windows(((0.0, "N"), (360.0, "N2")))


def test_validate_detects_gap():
    broken = (
        DirectionWindow("N", 0.0, 315.0, 45.0),
        DirectionWindow("S", 180.0, 50.0, 315.0),
    )
    with pytest.raises(ValueError, match="not contiguous"):
        validate_direction_windows(broken)


def test_malformed_table_falls_back_to_sentinel():
    classifier = DirectionClassifier([DirectionWindow("E", 90.0, 67.5, 112.5)])
    assert classifier.classify(0.0) == UNKNOWN_DIRECTION


def test_window_table_is_immutable():
    with pytest.raises(FrozenInstanceError):
        DIRECTION_WINDOWS[0].lower = 0.0
    assert isinstance(DIRECTION_WINDOWS, tuple)


def test_irregular_three_point_table():
    points = ((22.718, "A"), (204.908, "B"), (288.807, "C"))
    windows = build_direction_windows(points)

    assert sum(w.width for w in windows) == pytest.approx(360.0)
    assert windows[0].wraps
    classifier = DirectionClassifier(windows)
    for bearing, label in points:
        assert classifier.classify(bearing) == label


def test_two_point_table_with_boundary_on_zero():
    windows = build_direction_windows(((90.0, "E"), (270.0, "W")))
    assert [(w.lower, w.upper) for w in windows] == [(0.0, 180.0), (180.0, 0.0)]
    assert [w.wraps for w in windows] == [False, True]


def test_random_tables_build_and_cover_the_circle():
    rng = np.random.default_rng(2024)
    samples = np.arange(0.0, 360.0, 7.3)

    for _ in range(500):
        count = int(rng.integers(2, 9))
        bearings = np.unique(np.round(rng.uniform(0.0, 360.0, count), 3))
        bearings = bearings[bearings < 360.0]
        if len(bearings) < 2:
            continue
        points = tuple((float(b), f"P{i}") for i, b in enumerate(bearings))

        windows = build_direction_windows(points)
        assert sum(w.width for w in windows) == pytest.approx(360.0)
        assert sum(w.wraps for w in windows) == 1

        classifier = DirectionClassifier(windows)
        for bearing, label in points:
            assert classifier.classify(bearing) == label
        for degrees in samples:
            assert classifier.classify(float(degrees)) != UNKNOWN_DIRECTION
