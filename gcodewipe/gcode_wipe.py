#!/usr/bin/env python
# encoding: utf-8
"""compute the nozzle wipe geometry from retraction settings"""

import argparse
import logging
import sys

from gcodewipe.wipe.errors import ConfigurationError
from gcodewipe.wipe.settings import WipeSettings
from gcodewipe.wipe.wiper import GCodeWiper

__author__ = 'gcodewipe developers'


def write_wipe_geometry(wiper, output_file=sys.stdout):
    """Write the derived wipe geometry, one value per line"""
    values = [
        ("retract_before_wipe_percent", wiper.retract_before_wipe_percent),
        ("retract_after_wipe_percent", wiper.retract_after_wipe_percent),
        ("pre_wipe_retract_length", wiper.pre_wipe_retract_length),
        ("wipe_retraction_length", wiper.wipe_retraction_length),
        ("post_wipe_retract_length", wiper.post_wipe_retract_length),
        ("speed_ratio", wiper.speed_ratio),
        ("wipe_distance", wiper.wipe_distance),
        ("wipe_target", wiper.get_wipe_target()),
        ("distance_to_retraction_ratio", wiper.distance_to_retraction_ratio),
    ]
    for name, value in values:
        output_file.write("%s: %.4f\n" % (name, value))


def main():
    """command line entry point"""
    parser = argparse.ArgumentParser(description='Compute the nozzle wipe geometry for the given retraction settings')

    parser.add_argument('outfile', nargs='?', type=argparse.FileType('w'), default=sys.stdout,
                        help='Wipe geometry report. Defaults to standard output.')

    parser.add_argument('--retraction_length', type=float, default=2.0,
                        help='Total retraction length in mm, defaults to %(default)s')
    parser.add_argument('--retract_before_wipe_percent', type=float, default=0.0,
                        help='Part of the retraction done before wiping (0.3 for 30%%), defaults to %(default)s')
    parser.add_argument('--retract_after_wipe_percent', type=float, default=0.0,
                        help='Part of the retraction done after wiping (0.3 for 30%%), defaults to %(default)s')
    parser.add_argument('--wipe_feedrate', type=float, default=3000.0,
                        help='Wipe moves feedrate in mm/min, defaults to %(default)s')
    parser.add_argument('--retraction_feedrate', type=float, default=2400.0,
                        help='Retraction feedrate in mm/min, defaults to %(default)s')
    parser.add_argument('--xy_travel_speed', type=float, default=6000.0,
                        help='Travel feedrate in mm/min used when returning from a full wipe, '
                             'defaults to %(default)s')
    parser.add_argument('--half_wipe', action='store_true',
                        help='Wipe back and forth over half of the wipe distance instead of once over all of it')

    parser.add_argument('--verbose', '-v', action='count', default=1,
                        help='Verbose mode')
    parser.add_argument('--quiet', '-q', action='count', default=0, help='Quiet mode')

    args = parser.parse_args()

    # count verbose and quiet flags to determine logging level
    args.verbose -= args.quiet

    if args.verbose > 1:
        logging.root.setLevel(logging.DEBUG)
    elif args.verbose > 0:
        logging.root.setLevel(logging.INFO)

    logging.basicConfig(format="%(levelname)s:%(message)s")

    settings = WipeSettings(**vars(args))
    logging.debug("using %s", settings)

    try:
        wiper = GCodeWiper(settings, use_full_wipe=not args.half_wipe)
    except ConfigurationError as error:
        logging.error("invalid wipe settings: %s", error)
        sys.exit(1)

    write_wipe_geometry(wiper, args.outfile)


if __name__ == "__main__":
    main()
