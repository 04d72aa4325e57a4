"""A frequency tuner: a centre line and two band edges on a spectrogram."""

from enum import Enum

from .util import Range


class TunerCursor(Enum):
    """The three draggable lines of a tuner."""

    MIN = "min"
    CENTRE = "centre"
    MAX = "max"


class Tuner:
    """Centre position and deviation of a pass band, in pixel rows.

    ``height`` is the number of rows the tuner may move within. Callables
    in ``listeners`` are called with no arguments whenever the cursors move.
    """

    def __init__(self, height):
        self._height = height
        self.listeners = []
        self._positions = {cursor: 0 for cursor in TunerCursor}
        self._positions[TunerCursor.CENTRE] = height // 2
        self._deviation = max(height // 10, 2)
        self._update_cursors()

    @property
    def centre(self):
        """Row of the centre frequency."""
        return self._positions[TunerCursor.CENTRE]

    @property
    def deviation(self):
        """Distance in rows from the centre to either band edge."""
        return self._deviation

    @property
    def height(self):
        """Number of rows the tuner is limited to."""
        return self._height

    def set_centre(self, centre):
        """Move the centre line without limiting it."""
        self._positions[TunerCursor.CENTRE] = centre
        self._update_cursors()

    def set_deviation(self, dev):
        """Set the half bandwidth; it is never less than one row."""
        self._deviation = max(1, dev)
        self._update_cursors()

    def set_height(self, height):
        """Change the number of rows used to limit later cursor moves."""
        self._height = height

    def move_cursor(self, cursor, pos):
        """Move one cursor as a drag would, applying the tuner's limits.

        A band edge is kept inside the plot and sets the deviation, which is
        held between 2 and half the height. The centre is kept far enough
        from the plot edges for the whole band to fit.
        """
        cursor = TunerCursor(cursor)
        if cursor is TunerCursor.CENTRE:
            limits = Range(self._deviation, self._height - self._deviation)
            self._positions[cursor] = limits.clip(pos)
        else:
            pos = Range(0, max(self._height, 1)).clip(pos)
            self._positions[cursor] = pos
            deviation_limits = Range(2, max(self._height // 2, 2))
            self._deviation = deviation_limits.clip(abs(pos - self.centre))
        self._update_cursors()

    def cursor_position(self, cursor):
        """Current row of the given cursor."""
        return self._positions[TunerCursor(cursor)]

    def _update_cursors(self):
        centre = self._positions[TunerCursor.CENTRE]
        self._positions[TunerCursor.MIN] = centre - self._deviation
        self._positions[TunerCursor.MAX] = centre + self._deviation
        for listener in list(self.listeners):
            listener()