"""snapshot of the print head state, as stored by the wipe engine"""

from gcodewipe.utilities import get_cartesian_distance

__author__ = 'gcodewipe developers'


class WipePosition(object):
    """
    a snapshot of the print head at one instant, treated as a value: the wiper only stores its own copies and
    never modifies them

    x, y and e are machine coordinates, the *_offset attributes are the active origin offsets. Gcode sent in
    absolute mode must use the offset coordinates (offset_x, offset_y, offset_e), distances are computed on the
    machine coordinates.
    """

    FLAGS = ('is_extruding', 'is_layer_change', 'has_xy_position_changed', 'is_xy_relative', 'is_extruder_relative')

    __slots__ = ('x', 'y', 'e', 'x_offset', 'y_offset', 'e_offset') + FLAGS

    def __init__(self, x=0.0, y=0.0, e=0.0, x_offset=0.0, y_offset=0.0, e_offset=0.0,
                 is_extruding=False, is_layer_change=False, has_xy_position_changed=False,
                 is_xy_relative=False, is_extruder_relative=False):
        self.x = x
        self.y = y
        self.e = e
        self.x_offset = x_offset
        self.y_offset = y_offset
        self.e_offset = e_offset
        self.is_extruding = is_extruding
        self.is_layer_change = is_layer_change
        self.has_xy_position_changed = has_xy_position_changed
        self.is_xy_relative = is_xy_relative
        self.is_extruder_relative = is_extruder_relative

    @classmethod
    def from_position(cls, position):
        """
        copy a position record, either one giving the origin offsets (x_offset, y_offset, e and e_offset, like
        WipePosition) or a parser record only giving the machine x/y and the offset coordinates
        (offset_x, offset_y, offset_e)
        """
        values = dict((name, getattr(position, name)) for name in cls.FLAGS)
        values['x'] = position.x
        values['y'] = position.y
        if hasattr(position, 'x_offset'):
            values['x_offset'] = position.x_offset
            values['y_offset'] = position.y_offset
            values['e'] = position.e
            values['e_offset'] = position.e_offset
        else:
            values['x_offset'] = position.x - position.offset_x
            values['y_offset'] = position.y - position.offset_y
            # only the offset extruder position matters, keep it as the machine one
            values['e'] = position.offset_e
            values['e_offset'] = 0.0
        return cls(**values)

    @property
    def offset_x(self):
        return self.x - self.x_offset

    @property
    def offset_y(self):
        return self.y - self.y_offset

    @property
    def offset_e(self):
        return self.e - self.e_offset

    def _values(self):
        return dict((name, getattr(self, name)) for name in self.__slots__)

    def copy(self):
        return WipePosition(**self._values())

    def moved_to(self, x, y):
        """return a copy of this position located at (x, y), offsets and flags are kept"""
        values = self._values()
        values['x'] = x
        values['y'] = y
        return WipePosition(**values)

    def distance_to(self, other):
        return get_cartesian_distance(self.x, self.y, other.x, other.y)

    def __eq__(self, other):
        if not isinstance(other, WipePosition):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in self.__slots__)

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def __str__(self):
        return "WipePosition(%.3f, %.3f, e=%.5f)" % (self.x, self.y, self.e)

    __repr__ = __str__
