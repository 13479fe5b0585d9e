"""
Message Id Generator

Provides the per-channel counter used to correlate outbound chat writes
with the ids the server persists them under.
"""

# First id handed out by a fresh generator
DEFAULT_START_ID = 1


class IdGenerator:
    """
    Strictly increasing integer id source.

    Each instance keeps its own counter; ids are never reused within the
    lifetime of an instance. There is no locking, so an instance must have a
    single owner (one channel session or one transport).

    Attributes:
        last_id: The last id that was handed out (start - 1 if none yet)
    """

    def __init__(self, start: int = DEFAULT_START_ID):
        self.last_id = start - 1

    def next(self) -> int:
        """Draw the next id."""
        self.last_id += 1
        return self.last_id

    def __iter__(self):
        return self

    def __next__(self) -> int:
        return self.next()
