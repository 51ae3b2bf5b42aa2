"""wipe settings"""

__author__ = 'gcodewipe developers'


class WipeSettings(object):
    """
    retraction and wipe settings of a gcode program

    Percents are ratios (0.3 for 30%) of retraction_length, feedrates are in mm/min. Extra keyword arguments are
    accepted and ignored so settings can be built straight from the command line arguments.
    """

    __slots__ = ('retraction_length', 'retract_before_wipe_percent', 'retract_after_wipe_percent',
                 'wipe_feedrate', 'retraction_feedrate', 'xy_travel_speed')

    def __init__(self, retraction_length, retract_before_wipe_percent, retract_after_wipe_percent,
                 wipe_feedrate, retraction_feedrate, xy_travel_speed, **kwargs):
        self.retraction_length = float(retraction_length)
        self.retract_before_wipe_percent = float(retract_before_wipe_percent)
        self.retract_after_wipe_percent = float(retract_after_wipe_percent)
        self.wipe_feedrate = float(wipe_feedrate)
        self.retraction_feedrate = float(retraction_feedrate)
        self.xy_travel_speed = float(xy_travel_speed)

    def __str__(self):
        return "WipeSettings(retraction %.3fmm, before %.0f%%, after %.0f%%, wipe F%.0f, retract F%.0f, travel F%.0f)" % (
            self.retraction_length, self.retract_before_wipe_percent * 100, self.retract_after_wipe_percent * 100,
            self.wipe_feedrate, self.retraction_feedrate, self.xy_travel_speed)
