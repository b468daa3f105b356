import itertools
import threading


class FetchSequencer:
    """Orders fetch cycles so a slow, older response never replaces a newer one.

    ``issue()`` hands out increasing tickets when a fetch starts; ``accept()``
    is called when its response arrives and returns False for any ticket not
    newer than the last one accepted.
    """

    def __init__(self):
        self._counter = itertools.count(1)
        self._lock = threading.Lock()
        self._latest_issued = 0
        self._latest_accepted = 0

    def issue(self) -> int:
        with self._lock:
            self._latest_issued = next(self._counter)
            return self._latest_issued

    def accept(self, ticket: int) -> bool:
        with self._lock:
            if ticket <= self._latest_accepted:
                return False
            self._latest_accepted = ticket
            return True

    @property
    def in_flight(self) -> bool:
        with self._lock:
            return self._latest_issued > self._latest_accepted
