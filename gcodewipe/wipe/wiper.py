# coding=utf-8
# gcodewipe is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# gcodewipe is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with gcodewipe.  If not, see <http://www.gnu.org/licenses/>.

"""
Nozzle wipe engine.

The wiper follows the print head and keeps a trail of the most recent extruding moves of the current layer, just
long enough to wipe over. When a retraction is about to happen, get_wipe_steps retraces that trail backward then
forward while retracting, so the filament oozing from the nozzle is smeared over already printed lines instead of
leaving a blob. The whole retraction_length is consumed: a part before the wipe, a part during the wipe (spread
along the wiped distance according to the wipe and retraction feedrates) and the rest after the wipe.
"""

import logging

from gcodewipe.utilities import is_zero, is_equal, greater_than, less_than, get_cartesian_distance
from gcodewipe.wipe.errors import AlreadyInitializedError, ConfigurationError, DegenerateGeometryError, \
    NotInitializedError
from gcodewipe.wipe.history import PositionHistory
from gcodewipe.wipe.position import WipePosition
from gcodewipe.wipe.step import WipeStep

__author__ = 'gcodewipe developers'

logger = logging.getLogger('wiper')


def normalize_retraction_percents(before_percent, after_percent):
    """
    clamp the pre/post wipe retraction percents to positive values, and if they exceed 100% together, reduce each
    one proportionally
    :return: a tuple of the before and after percents
    """
    before_percent = max(before_percent, 0.0)
    after_percent = max(after_percent, 0.0)
    total_percent = before_percent + after_percent
    if greater_than(total_percent, 1.0):
        before_percent /= total_percent
        after_percent /= total_percent
    return before_percent, after_percent


class GCodeWiper(object):  # pylint: disable=too-many-instance-attributes
    """accumulate extruding moves and generate wipe steps over them"""

    def __init__(self, settings=None, use_full_wipe=True):
        self.settings = None
        self.is_initialized = False
        self._use_full_wipe = use_full_wipe

        self.total_distance = 0.0
        self.starting_position = None
        self.history = PositionHistory()
        # (starting_position, total_distance) before the last update
        self._undo_data = None

        self.retract_before_wipe_percent = 0.0
        self.retract_after_wipe_percent = 0.0
        self.pre_wipe_retract_length = 0.0
        self.post_wipe_retract_length = 0.0
        self.wipe_retraction_length = 0.0
        self.speed_ratio = 0.0
        self.wipe_distance = 0.0
        self.half_wipe_distance = 0.0
        self.distance_to_retraction_ratio = 0.0

        if settings is not None:
            self.initialize(settings)

    @property
    def use_full_wipe(self):
        """wipe over the whole wipe distance once, or twice over half of it"""
        return self._use_full_wipe

    def initialize(self, settings):
        """
        derive the wipe geometry from the settings
        :param settings: a WipeSettings
        :raise ConfigurationError: if the settings leave no distance to wipe
        :raise AlreadyInitializedError: if the wiper already has its settings
        """
        if self.is_initialized:
            raise AlreadyInitializedError("the wipe geometry can't change once the wiper is initialized")

        before_percent, after_percent = normalize_retraction_percents(
            settings.retract_before_wipe_percent, settings.retract_after_wipe_percent)

        if is_zero(settings.retraction_feedrate):
            raise ConfigurationError("retraction feedrate must not be zero")

        pre_wipe_retract_length = settings.retraction_length * before_percent
        post_wipe_retract_length = settings.retraction_length * after_percent
        wipe_retraction_length = settings.retraction_length - pre_wipe_retract_length - post_wipe_retract_length
        speed_ratio = settings.wipe_feedrate / settings.retraction_feedrate
        wipe_distance = wipe_retraction_length * speed_ratio

        if not greater_than(wipe_distance, 0.0):
            raise ConfigurationError(
                "no distance left to wipe (wipe retraction %.4fmm, wipe/retraction speed ratio %.4f)" % (
                    wipe_retraction_length, speed_ratio))

        self.settings = settings
        self.retract_before_wipe_percent = before_percent
        self.retract_after_wipe_percent = after_percent
        self.pre_wipe_retract_length = pre_wipe_retract_length
        self.post_wipe_retract_length = post_wipe_retract_length
        self.wipe_retraction_length = wipe_retraction_length
        self.speed_ratio = speed_ratio
        self.wipe_distance = wipe_distance
        self.half_wipe_distance = wipe_distance * 0.5
        self.distance_to_retraction_ratio = wipe_retraction_length / wipe_distance
        self.is_initialized = True

        logger.info("wipe distance %.4fmm (%s), retraction %.4fmm before, %.4fmm during, %.4fmm after wipe",
                    self.get_wipe_target(), "full" if self._use_full_wipe else "half", pre_wipe_retract_length,
                    wipe_retraction_length, post_wipe_retract_length)

    def _check_initialized(self):
        if not self.is_initialized:
            raise NotInitializedError("the wiper must be initialized with settings first")

    def update(self, current_position, previous_position):
        """
        track a move from previous_position to current_position
        """
        self._check_initialized()
        self._save_undo_data()

        # The wipe trail is only made of extruding moves within a single layer, anything else restarts it
        if current_position.is_layer_change or not (
                current_position.has_xy_position_changed and current_position.is_extruding):
            if self.history:
                logger.debug("wipe trail of %.4fmm dropped", self.total_distance)
            self.total_distance = 0.0
            self.starting_position = None
            self.history.clear()
            return

        current_position = WipePosition.from_position(current_position)
        previous_position = WipePosition.from_position(previous_position)

        if not self.history:
            self.starting_position = previous_position

        self.history.push_back(current_position)
        self.total_distance += previous_position.distance_to(current_position)
        self.prune()

    def _save_undo_data(self):
        self._undo_data = (self.starting_position, self.total_distance)
        self.history.save_snapshot()

    def undo(self):
        """
        revert the last update. Only one update can be reverted.
        :return: False if there was nothing to undo
        """
        self._check_initialized()
        if self._undo_data is None:
            logger.debug("nothing to undo")
            return False

        self.starting_position, self.total_distance = self._undo_data
        self._undo_data = None
        self.history.restore_snapshot()
        return True

    def get_wipe_target(self):
        self._check_initialized()
        if self._use_full_wipe:
            return self.wipe_distance
        return self.half_wipe_distance

    def get_missing_retraction(self):
        """
        retraction which can't be done while wiping because the trail is shorter than the wipe target
        (negative if the trail is longer)
        """
        missing_distance = self.get_wipe_target() - self.total_distance
        if not self._use_full_wipe:
            # a half wipe travels over the trail twice
            missing_distance *= 2
        return missing_distance * self.distance_to_retraction_ratio

    def get_extra_retraction(self):
        """distance by which the trail exceeds the wipe target (negative if it is shorter)"""
        return self.total_distance - self.get_wipe_target()

    def prune(self):
        """
        remove the oldest positions while the trail stays at least as long as the wipe target
        """
        target = self.get_wipe_target()
        pruned_count = 0
        while self.total_distance > target:
            front_position = self.history.peek()
            distance_removed = self.starting_position.distance_to(front_position)
            new_total_distance = self.total_distance - distance_removed

            # keep a trail slightly too long rather than too short, the extra part is clipped when wiping
            if less_than(new_total_distance, target):
                break

            self.starting_position = self.history.remove_oldest()
            self.total_distance = new_total_distance
            pruned_count += 1

        if pruned_count:
            logger.debug("pruned %d position(s), wipe trail is now %.4fmm", pruned_count, self.total_distance)

    @staticmethod
    def clip_segment(excess_distance, from_position, to_position):
        """
        shorten the segment from_position -> to_position by excess_distance
        :return: a copy of to_position moved toward from_position, the given positions are left untouched
        :raise DegenerateGeometryError: if the segment is not longer than excess_distance
        """
        distance = get_cartesian_distance(from_position.x, from_position.y, to_position.x, to_position.y)
        if is_zero(distance) or not greater_than(distance, excess_distance):
            raise DegenerateGeometryError(
                "can't clip %.4fmm from a %.4fmm segment" % (excess_distance, distance))

        kept_distance_ratio = (distance - excess_distance) / distance
        return to_position.moved_to(
            from_position.x + (to_position.x - from_position.x) * kept_distance_ratio,
            from_position.y + (to_position.y - from_position.y) * kept_distance_ratio)

    def get_wipe_steps(self):
        """
        generate the moves wiping over the trail, bracketed by the pre and post wipe retractions
        :return: a list of WipeStep, empty if there is nothing to wipe over
        """
        self._check_initialized()
        if is_zero(self.total_distance) or self.starting_position is None or not self.history:
            return []

        settings = self.settings
        post_wipe_retract_length = self.post_wipe_retract_length
        missing_retraction = self.get_missing_retraction()
        if greater_than(missing_retraction, 0.0):
            post_wipe_retract_length += missing_retraction

        positions, anchor_index = self.history.all_with_anchor_index()
        first_position = positions[anchor_index]
        last_position = positions[-1]

        # too much trail: move the (copied) anchor toward the oldest position so the trail matches the target
        start_position = self.starting_position
        extra_distance = self.get_extra_retraction()
        if greater_than(extra_distance, 0.0):
            start_position = self.clip_segment(extra_distance, first_position, start_position)

        wipe_steps = []
        current_offset_e = last_position.offset_e

        if greater_than(self.pre_wipe_retract_length, 0.0):
            if last_position.is_extruder_relative:
                e = -self.pre_wipe_retract_length
            else:
                e = current_offset_e - self.pre_wipe_retract_length
            wipe_steps.append(WipeStep.retract(e, settings.retraction_feedrate))
            current_offset_e -= self.pre_wipe_retract_length

        feedrate = settings.wipe_feedrate

        # backward, from the newest position to the oldest one
        backward_path = positions[anchor_index:][::-1]
        for previous_position, current_position in zip(backward_path, backward_path[1:]):
            step, current_offset_e = self._get_wipe_step(
                previous_position, current_position, current_offset_e, feedrate, is_return=False)
            wipe_steps.append(step)
            feedrate = None

        # to the anchor and back
        step, current_offset_e = self._get_wipe_step(
            first_position, start_position, current_offset_e, feedrate, is_return=False)
        wipe_steps.append(step)

        feedrate = settings.xy_travel_speed if self._use_full_wipe else None
        step, current_offset_e = self._get_wipe_step(
            start_position, first_position, current_offset_e, feedrate, is_return=True)
        wipe_steps.append(step)

        # forward, up to the newest position
        forward_path = positions[anchor_index:]
        for previous_position, current_position in zip(forward_path, forward_path[1:]):
            step, current_offset_e = self._get_wipe_step(
                previous_position, current_position, current_offset_e, None, is_return=True)
            wipe_steps.append(step)

        if greater_than(post_wipe_retract_length, 0.0):
            feedrate = None
            if not is_equal(settings.retraction_feedrate, settings.wipe_feedrate):
                feedrate = settings.retraction_feedrate

            if last_position.is_extruder_relative:
                e = -post_wipe_retract_length
            else:
                e = current_offset_e - post_wipe_retract_length
            wipe_steps.append(WipeStep.retract(e, feedrate))

        logger.debug("wipe over %.4fmm generated %d steps", min(self.total_distance, self.get_wipe_target()),
                     len(wipe_steps))
        return wipe_steps

    def _get_wipe_step(self, start_position, end_position, current_offset_e, feedrate, is_return):
        """
        :return: a tuple of the step moving from start_position to end_position and the updated offset e
        """
        if end_position.is_xy_relative:
            x = end_position.x - start_position.x
            y = end_position.y - start_position.y
        else:
            # absolute moves have to be sent in offset coordinates
            x = end_position.offset_x
            y = end_position.offset_y

        # a full wipe only retracts on the way out, the way back is a plain travel
        if self._use_full_wipe and is_return:
            return WipeStep(x, y, feedrate=feedrate), current_offset_e

        retraction = start_position.distance_to(end_position) * self.distance_to_retraction_ratio
        if end_position.is_extruder_relative:
            e = -retraction
        else:
            current_offset_e -= retraction
            e = current_offset_e
        return WipeStep(x, y, e, feedrate), current_offset_e
