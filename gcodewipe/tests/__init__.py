from gcodewipe.wipe.position import WipePosition
from gcodewipe.wipe.settings import WipeSettings
from gcodewipe.wipe.wiper import GCodeWiper

__author__ = 'gcodewipe developers'


def make_settings(**kwargs):
    """2mm retraction, 30% before and after the wipe, wiping twice as fast as retracting"""
    values = dict(retraction_length=2.0, retract_before_wipe_percent=0.3, retract_after_wipe_percent=0.3,
                  wipe_feedrate=3000, retraction_feedrate=1500, xy_travel_speed=6000)
    values.update(kwargs)
    return WipeSettings(**values)


def make_wiper(use_full_wipe=True, **kwargs):
    return GCodeWiper(make_settings(**kwargs), use_full_wipe=use_full_wipe)


def extruding_position(x, y, e=0.0, **kwargs):
    """position reached by an extruding XY move, relative XY and extrusion unless told otherwise"""
    values = dict(is_extruding=True, has_xy_position_changed=True, is_xy_relative=True, is_extruder_relative=True)
    values.update(kwargs)
    return WipePosition(x, y, e, **values)


def feed_moves(wiper, positions):
    """update the wiper with each move between consecutive positions"""
    for previous_position, current_position in zip(positions, positions[1:]):
        wiper.update(current_position, previous_position)


def straight_line(count, **kwargs):
    """count + 1 positions 1mm apart along X, starting at the origin"""
    return [extruding_position(float(x), 0.0, **kwargs) for x in range(count + 1)]
