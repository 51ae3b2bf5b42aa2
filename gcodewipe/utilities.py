"""floating point comparison and planar distance helpers shared by the wipe code"""

from math import sqrt

__author__ = 'gcodewipe developers'

EPSILON = 0.000001  # everything closer than this is considered equal


def is_zero(value):
    return abs(value) < EPSILON


def is_equal(lhs, rhs):
    return abs(lhs - rhs) < EPSILON


def greater_than(lhs, rhs):
    return lhs > rhs and not is_equal(lhs, rhs)


def less_than(lhs, rhs):
    return lhs < rhs and not is_equal(lhs, rhs)


def get_cartesian_distance(x1, y1, x2, y2):
    xdiff = x2 - x1
    ydiff = y2 - y1
    return sqrt(xdiff * xdiff + ydiff * ydiff)
