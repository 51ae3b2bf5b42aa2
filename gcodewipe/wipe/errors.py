"""errors raised by the wipe engine"""

__author__ = 'gcodewipe developers'


class WipeError(RuntimeError):
    """base class of every wipe engine error"""


class ConfigurationError(WipeError, ValueError):
    """settings which can't produce a usable wipe (zero feedrate, no distance left to wipe, ...)"""


class NotInitializedError(WipeError):
    """the wiper was used before being given its settings"""


class DegenerateGeometryError(WipeError):
    """a segment can't be clipped because it has no length (or is shorter than the clipped part)"""


class AlreadyInitializedError(WipeError):
    """the wiper settings were given twice, the wipe geometry can't change under an existing trail"""
