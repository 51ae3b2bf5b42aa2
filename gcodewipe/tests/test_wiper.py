from collections import namedtuple

from nose.tools import eq_, ok_, assert_almost_equal, assert_raises, assert_false, assert_is_none

from gcodewipe.tests import make_wiper, extruding_position, feed_moves, straight_line
from gcodewipe.wipe.errors import DegenerateGeometryError
from gcodewipe.wipe.position import WipePosition
from gcodewipe.wipe.wiper import GCodeWiper

__author__ = 'gcodewipe developers'


def history_xs(wiper):
    return [position.x for position in wiper.history]


def test_single_move():
    wiper = make_wiper()
    feed_moves(wiper, straight_line(1))

    assert_almost_equal(1.0, wiper.total_distance)
    eq_(0.0, wiper.starting_position.x)
    eq_([1.0], history_xs(wiper))


def test_trail_pruned_to_wipe_distance():
    wiper = make_wiper()
    feed_moves(wiper, straight_line(3))

    # removing one more 1mm segment would leave less than the 1.6mm wipe distance
    assert_almost_equal(2.0, wiper.total_distance)
    eq_(1.0, wiper.starting_position.x)
    eq_([2.0, 3.0], history_xs(wiper))


def test_trail_pruned_to_half_wipe_distance():
    wiper = make_wiper(use_full_wipe=False)
    feed_moves(wiper, straight_line(3))

    assert_almost_equal(1.0, wiper.total_distance)
    eq_(2.0, wiper.starting_position.x)
    eq_([3.0], history_xs(wiper))


def test_pruning_never_undershoots_target():
    wiper = make_wiper()
    positions = [extruding_position(0.3 * index, 0.0) for index in range(30)]

    for previous_position, current_position in zip(positions, positions[1:]):
        wiper.update(current_position, previous_position)
        if wiper.total_distance > 1.6:
            ok_(wiper.total_distance < 1.6 + 0.3)
        # the distance always matches the trail from the anchor
        trail = [wiper.starting_position] + list(wiper.history)
        walked = sum(start.distance_to(end) for start, end in zip(trail, trail[1:]))
        assert_almost_equal(walked, wiper.total_distance)


def test_short_trail_kept_whole():
    wiper = make_wiper()
    feed_moves(wiper, [extruding_position(0.0, 0.0), extruding_position(0.5, 0.0), extruding_position(0.5, 0.5)])

    assert_almost_equal(1.0, wiper.total_distance)
    eq_(2, len(wiper.history))


def test_layer_change_clears_trail():
    wiper = make_wiper()
    positions = straight_line(3)
    feed_moves(wiper, positions)

    wiper.update(extruding_position(4.0, 0.0, is_layer_change=True), positions[-1])

    eq_(0.0, wiper.total_distance)
    eq_(0, len(wiper.history))
    assert_is_none(wiper.starting_position)


def test_non_extruding_move_clears_trail():
    wiper = make_wiper()
    positions = straight_line(2)
    feed_moves(wiper, positions)

    wiper.update(extruding_position(5.0, 0.0, is_extruding=False), positions[-1])

    eq_(0.0, wiper.total_distance)
    eq_(0, len(wiper.history))


def test_extrusion_without_xy_move_clears_trail():
    wiper = make_wiper()
    positions = straight_line(2)
    feed_moves(wiper, positions)

    wiper.update(extruding_position(2.0, 0.0, has_xy_position_changed=False), positions[-1])

    eq_(0.0, wiper.total_distance)
    assert_is_none(wiper.starting_position)


def test_trail_restarts_after_clear():
    wiper = make_wiper()
    feed_moves(wiper, straight_line(2))
    wiper.update(extruding_position(2.0, 0.0, is_layer_change=True), extruding_position(2.0, 0.0))

    wiper.update(extruding_position(2.0, 1.0), extruding_position(2.0, 0.0))

    assert_almost_equal(1.0, wiper.total_distance)
    eq_(0.0, wiper.starting_position.y)
    eq_(1, len(wiper.history))


def test_undo_pruning_update():
    wiper = make_wiper()
    positions = straight_line(3)
    feed_moves(wiper, positions[:3])
    total_distance, starting_position, xs = wiper.total_distance, wiper.starting_position, history_xs(wiper)

    wiper.update(positions[3], positions[2])
    ok_(wiper.undo())

    eq_(total_distance, wiper.total_distance)
    eq_(starting_position, wiper.starting_position)
    eq_(xs, history_xs(wiper))


def test_undo_clearing_update():
    wiper = make_wiper()
    positions = straight_line(2)
    feed_moves(wiper, positions)
    total_distance, xs = wiper.total_distance, history_xs(wiper)

    wiper.update(extruding_position(3.0, 0.0, is_layer_change=True), positions[-1])
    ok_(wiper.undo())

    eq_(total_distance, wiper.total_distance)
    eq_(xs, history_xs(wiper))
    eq_(0.0, wiper.starting_position.x)


def test_undo_first_update():
    wiper = make_wiper()
    feed_moves(wiper, straight_line(1))

    ok_(wiper.undo())

    eq_(0.0, wiper.total_distance)
    eq_(0, len(wiper.history))
    assert_is_none(wiper.starting_position)


def test_second_undo_is_noop():
    wiper = make_wiper()
    positions = straight_line(3)
    feed_moves(wiper, positions)
    ok_(wiper.undo())
    total_distance, xs = wiper.total_distance, history_xs(wiper)

    assert_false(wiper.undo())
    eq_(total_distance, wiper.total_distance)
    eq_(xs, history_xs(wiper))


def test_undo_without_update():
    assert_false(make_wiper().undo())


def test_stored_positions_are_copies():
    wiper = make_wiper()
    previous_position = extruding_position(0.0, 0.0)
    current_position = extruding_position(1.0, 0.0)
    wiper.update(current_position, previous_position)

    current_position.x = 50.0
    previous_position.x = 50.0

    eq_([1.0], history_xs(wiper))
    eq_(0.0, wiper.starting_position.x)


def test_update_accepts_parser_positions():
    ParserPosition = namedtuple('ParserPosition', WipePosition.__slots__)
    previous_position = ParserPosition(0.0, 0.0, 0.0, 0.0, 0.0, 0.0, True, False, True, False, False)
    current_position = previous_position._replace(x=3.0, y=4.0)

    wiper = make_wiper(retraction_length=5.0, retract_before_wipe_percent=0, retract_after_wipe_percent=0)
    wiper.update(current_position, previous_position)

    assert_almost_equal(5.0, wiper.total_distance)
    ok_(isinstance(wiper.history.peek(), WipePosition))


def test_missing_retraction():
    wiper = make_wiper()
    feed_moves(wiper, straight_line(1))
    assert_almost_equal(0.3, wiper.get_missing_retraction())
    assert_almost_equal(-0.6, wiper.get_extra_retraction())

    wiper = make_wiper(use_full_wipe=False)
    feed_moves(wiper, [extruding_position(0.0, 0.0), extruding_position(0.5, 0.0)])
    # the half wipe goes over the trail twice
    assert_almost_equal(0.3, wiper.get_missing_retraction())


def test_extra_retraction():
    wiper = make_wiper()
    feed_moves(wiper, straight_line(3))

    assert_almost_equal(0.4, wiper.get_extra_retraction())
    ok_(wiper.get_missing_retraction() < 0)


def test_clip_segment():
    from_position = extruding_position(0.0, 0.0)
    to_position = extruding_position(2.0, 0.0)

    clipped = GCodeWiper.clip_segment(0.5, from_position, to_position)

    assert_almost_equal(1.5, clipped.x)
    assert_almost_equal(0.0, clipped.y)
    eq_(2.0, to_position.x)


def test_clip_diagonal_segment_keeps_offsets():
    from_position = extruding_position(0.0, 0.0)
    to_position = extruding_position(3.0, 4.0, x_offset=1.0, y_offset=-1.0, is_xy_relative=False)

    clipped = GCodeWiper.clip_segment(2.5, from_position, to_position)

    assert_almost_equal(1.5, clipped.x)
    assert_almost_equal(2.0, clipped.y)
    assert_almost_equal(0.5, clipped.offset_x)
    assert_almost_equal(3.0, clipped.offset_y)
    assert_false(clipped.is_xy_relative)


def test_clip_degenerate_segment():
    position = extruding_position(1.0, 1.0)
    assert_raises(DegenerateGeometryError, GCodeWiper.clip_segment, 0.1, position, position.copy())
    assert_raises(DegenerateGeometryError, GCodeWiper.clip_segment, 2.0,
                  extruding_position(0.0, 0.0), extruding_position(1.0, 0.0))
