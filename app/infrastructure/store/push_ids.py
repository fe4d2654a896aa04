from __future__ import annotations

import random
import threading
import time

PUSH_CHARS = "-0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ_abcdefghijklmnopqrstuvwxyz"


class PushIdGenerator:
    """
    Chronologically sortable 20-character keys in the style of realtime
    database push ids: 8 characters of timestamp followed by 12 random ones.
    Keys generated within the same millisecond increment the random part so
    they still sort in creation order.
    """

    def __init__(self, now_ms=None, rng: random.Random | None = None) -> None:
        self._now_ms = now_ms or (lambda: int(time.time() * 1000))
        self._rng = rng or random.SystemRandom()
        self._last_ts = -1
        self._last_rand: list[int] = [0] * 12
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            now = self._now_ms()
            duplicate = now == self._last_ts
            self._last_ts = now

            ts_chars = []
            value = now
            for _ in range(8):
                ts_chars.append(PUSH_CHARS[value % 64])
                value //= 64
            prefix = "".join(reversed(ts_chars))

            if not duplicate:
                self._last_rand = [self._rng.randrange(64) for _ in range(12)]
            else:
                i = 11
                while i >= 0 and self._last_rand[i] == 63:
                    self._last_rand[i] = 0
                    i -= 1
                if i >= 0:
                    self._last_rand[i] += 1

            return prefix + "".join(PUSH_CHARS[n] for n in self._last_rand)
