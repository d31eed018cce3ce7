from collections import OrderedDict
from threading import Lock
from typing import Any, Optional, Tuple

from leisure_pricing.core.config import settings


class QuoteSequencer:
    """
    Last-write-wins bookkeeping for rapid successive recalculations.

    Every recalculation of a booking form draws a sequence number for its
    quote key; only the result of the latest sequence is published, so an
    older request finishing late cannot overwrite a newer price.

    At most ``max_keys`` quote keys are tracked; the least recently begun
    key is dropped first.
    """

    def __init__(self, max_keys: Optional[int] = None) -> None:
        self._lock = Lock()
        self._max_keys = max_keys if max_keys is not None else settings.QUOTE_KEYS_MAX
        self._latest_seq: "OrderedDict[str, int]" = OrderedDict()
        self._published: "OrderedDict[str, Tuple[int, Any]]" = OrderedDict()

    def begin(self, quote_key: str) -> int:
        with self._lock:
            seq = self._latest_seq.get(quote_key, 0) + 1
            self._latest_seq[quote_key] = seq
            self._latest_seq.move_to_end(quote_key)
            while len(self._latest_seq) > self._max_keys:
                oldest, _ = self._latest_seq.popitem(last=False)
                self._published.pop(oldest, None)
            return seq

    def complete(self, quote_key: str, seq: int, result: Any) -> bool:
        """Publish ``result``; False (and nothing stored) when superseded or evicted."""
        with self._lock:
            if seq != self._latest_seq.get(quote_key):
                return False
            self._published[quote_key] = (seq, result)
            return True

    def latest(self, quote_key: str) -> Optional[Tuple[int, Any]]:
        with self._lock:
            return self._published.get(quote_key)

    def is_current(self, quote_key: str, seq: int) -> bool:
        with self._lock:
            return seq == self._latest_seq.get(quote_key)

    def forget(self, quote_key: str) -> None:
        with self._lock:
            self._latest_seq.pop(quote_key, None)
            self._published.pop(quote_key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._latest_seq)


quote_sequencer = QuoteSequencer()
