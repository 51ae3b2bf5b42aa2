"""single motion produced by the wipe path synthesis"""

__author__ = 'gcodewipe developers'


class WipeStep(object):
    """
    one motion of a wipe

    delta_x/delta_y are relative deltas or absolute offset coordinates, depending on the xy mode of the position
    the step moves to; both are None for a pure retraction. delta_e is relative or absolute (offset) depending on
    the extruder mode, None for a pure travel. A None feedrate means the previous feedrate is kept.
    """

    __slots__ = ('delta_x', 'delta_y', 'delta_e', 'feedrate')

    def __init__(self, delta_x=None, delta_y=None, delta_e=None, feedrate=None):
        self.delta_x = delta_x
        self.delta_y = delta_y
        self.delta_e = delta_e
        self.feedrate = feedrate

    @classmethod
    def retract(cls, delta_e, feedrate=None):
        return cls(delta_e=delta_e, feedrate=feedrate)

    @property
    def is_retraction(self):
        """true for an extruder only move"""
        return self.delta_x is None and self.delta_y is None

    @property
    def is_travel(self):
        return self.delta_e is None

    def __str__(self):
        parts = []
        if self.delta_x is not None:
            parts.append("X%.4f" % self.delta_x)
        if self.delta_y is not None:
            parts.append("Y%.4f" % self.delta_y)
        if self.delta_e is not None:
            parts.append("E%.5f" % self.delta_e)
        if self.feedrate is not None:
            parts.append("F%.0f" % self.feedrate)
        return "WipeStep(%s)" % " ".join(parts)

    __repr__ = __str__
