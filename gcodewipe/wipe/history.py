"""bounded trail of recent extruding positions with a single level of undo"""

from collections import deque

__author__ = 'gcodewipe developers'


class PositionHistory(object):
    """
    ordered list of positions, oldest first

    Positions are appended at the tail and pruned from the head. The wiper anchor (the position preceding the
    oldest entry) is not part of the history, it always connects to the head, see all_with_anchor_index.
    """

    def __init__(self):
        self._positions = deque()
        self._snapshot = None

    def __len__(self):
        return len(self._positions)

    def __iter__(self):
        return iter(self._positions)

    def push_back(self, position):
        self._positions.append(position.copy())

    def peek(self):
        """return the oldest position without removing it"""
        return self._positions[0]

    def remove_oldest(self):
        return self._positions.popleft()

    def clear(self):
        self._positions.clear()

    def all_with_anchor_index(self):
        """
        :return: a tuple made of the positions (oldest first) and the index of the position the anchor connects to
        """
        return list(self._positions), 0

    def save_snapshot(self):
        # positions are never mutated once stored so a shallow copy is enough
        self._snapshot = tuple(self._positions)

    def restore_snapshot(self):
        """
        revert to the last saved snapshot, which is then dropped
        :return: False if there was no snapshot to restore
        """
        if self._snapshot is None:
            return False
        self._positions = deque(self._snapshot)
        self._snapshot = None
        return True
