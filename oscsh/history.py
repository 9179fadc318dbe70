from oscsh.config import HISTORY_SIZE


class HistoryStore:
    """Fixed-size ring of recent command lines with a browsing cursor.

    Entries are kept in ``_slots``; the logical order runs from
    ``write_cursor - count`` to ``write_cursor - 1`` (mod capacity), oldest
    first. ``browse_cursor`` is None while the user is not navigating.
    """

    def __init__(self, capacity=HISTORY_SIZE):
        if capacity < 1:
            raise ValueError("history capacity must be at least 1")
        self.capacity = capacity
        self._slots = [""] * capacity
        self.count = 0
        self.write_cursor = 0
        self.browse_cursor = None

    def __len__(self):
        return self.count

    @property
    def browsing(self):
        return self.browse_cursor is not None

    def _oldest_slot(self):
        return (self.write_cursor - self.count) % self.capacity

    def _newest_slot(self):
        return (self.write_cursor - 1) % self.capacity

    def record(self, line):
        """Store a submitted line. Skip empty lines and adjacent duplicates."""
        if not line:
            return
        if self.count and self._slots[self._newest_slot()] == line:
            return
        self._slots[self.write_cursor] = line
        self.write_cursor = (self.write_cursor + 1) % self.capacity
        if self.count < self.capacity:
            self.count += 1
        self.reset_browse_cursor()

    def most_recent(self):
        """Return the newest entry, or None when nothing is stored."""
        if not self.count:
            return None
        return self._slots[self._newest_slot()]

    def entries(self):
        """Return stored entries, oldest first."""
        start = self._oldest_slot()
        return [self._slots[(start + i) % self.capacity] for i in range(self.count)]

    def reset_browse_cursor(self):
        self.browse_cursor = None

    def navigate_previous(self):
        """Move to an older entry.

        Returns the entry now selected, or None when nothing changed
        (empty history, or already at the oldest entry).
        """
        if not self.count:
            return None
        if self.browse_cursor is None:
            self.browse_cursor = self._newest_slot()
        elif self.browse_cursor == self._oldest_slot():
            return None
        else:
            self.browse_cursor = (self.browse_cursor - 1) % self.capacity
        return self._slots[self.browse_cursor]

    def navigate_next(self):
        """Move to a newer entry.

        Returns None when not browsing, "" when stepping past the newest
        entry (browsing stops and the edit line should be cleared), and
        the newly selected entry otherwise.
        """
        if self.browse_cursor is None:
            return None
        if self.browse_cursor == self._newest_slot():
            self.reset_browse_cursor()
            return ""
        self.browse_cursor = (self.browse_cursor + 1) % self.capacity
        return self._slots[self.browse_cursor]

    def show(self):
        """Print stored entries numbered oldest to newest."""
        for i, line in enumerate(self.entries(), start=1):
            print(f"{i}\t{line}")
