import pytest

from specscope.tuner import Tuner, TunerCursor


def test_initial_state_for_height_100():
    tuner = Tuner(100)
    assert tuner.centre == 50
    assert tuner.deviation == 10


def test_small_height_has_minimum_deviation():
    tuner = Tuner(8)
    assert tuner.deviation == 2


def test_edges_follow_centre_and_deviation():
    tuner = Tuner(200)
    assert tuner.cursor_position(TunerCursor.MIN) == tuner.centre - tuner.deviation
    assert tuner.cursor_position(TunerCursor.MAX) == tuner.centre + tuner.deviation


def test_set_centre_moves_edges_without_clipping():
    tuner = Tuner(100)
    tuner.set_centre(500)
    assert tuner.centre == 500
    assert tuner.cursor_position(TunerCursor.MAX) == 500 + tuner.deviation


def test_set_deviation_has_floor_of_one():
    tuner = Tuner(100)
    tuner.set_deviation(0)
    assert tuner.deviation == 1
    tuner.set_deviation(-7)
    assert tuner.deviation == 1


def test_set_deviation_updates_edges():
    tuner = Tuner(100)
    tuner.set_deviation(17)
    assert tuner.cursor_position(TunerCursor.MIN) == tuner.centre - 17
    assert tuner.cursor_position(TunerCursor.MAX) == tuner.centre + 17


def test_dragging_max_beyond_plot_limits_deviation_to_half_height():
    tuner = Tuner(100)
    tuner.move_cursor(TunerCursor.MAX, 500)
    assert tuner.deviation == tuner.height // 2
    assert tuner.cursor_position(TunerCursor.MAX) == tuner.centre + tuner.deviation


def test_dragging_min_onto_centre_keeps_deviation_at_two():
    tuner = Tuner(100)
    tuner.move_cursor(TunerCursor.MIN, tuner.centre)
    assert tuner.deviation == 2


def test_dragging_edge_sets_deviation_from_distance():
    tuner = Tuner(100)
    tuner.move_cursor(TunerCursor.MIN, tuner.centre - 23)
    assert tuner.deviation == 23
    assert tuner.cursor_position(TunerCursor.MIN) == tuner.centre - 23


def test_centre_is_kept_inside_band_limits():
    tuner = Tuner(100)
    tuner.move_cursor(TunerCursor.CENTRE, 0)
    assert tuner.centre == tuner.deviation
    tuner.move_cursor(TunerCursor.CENTRE, 10_000)
    assert tuner.centre == tuner.height - tuner.deviation


def test_move_cursor_accepts_enum_value():
    tuner = Tuner(100)
    tuner.move_cursor("centre", 30)
    assert tuner.centre == 30


def test_unknown_cursor_is_rejected():
    tuner = Tuner(100)
    with pytest.raises(ValueError):
        tuner.move_cursor("side", 3)


def test_set_height_changes_later_limits():
    tuner = Tuner(100)
    tuner.set_height(1000)
    tuner.move_cursor(TunerCursor.MAX, 900)
    assert tuner.height == 1000
    assert tuner.deviation == 900 - tuner.centre


def test_listeners_are_called_on_every_move():
    tuner = Tuner(100)
    calls = []
    tuner.listeners.append(lambda: calls.append(tuner.centre))
    tuner.set_centre(40)
    tuner.set_deviation(5)
    tuner.move_cursor(TunerCursor.CENTRE, 60)
    assert calls == [40, 40, 60]