import secrets
import string
import time
from typing import Callable, Optional

SUFFIX_ALPHABET = string.ascii_uppercase + string.digits
SUFFIX_LENGTH = 5


class TrackingNumberGenerator:
    """
    Builds public tracking codes of the form ``<PREFIX>-<epoch millis>-<XXXXX>``.

    The clock and random source are injectable so callers (and tests) can pin
    them. Uniqueness is probabilistic; the database unique constraint is the
    final word.
    """

    def __init__(
        self,
        prefix: str = "SA",
        clock: Optional[Callable[[], float]] = None,
        choice: Optional[Callable[[str], str]] = None,
    ):
        self.prefix = prefix
        self._clock = clock or time.time
        self._choice = choice or secrets.choice

    def generate(self) -> str:
        millis = int(self._clock() * 1000)
        suffix = "".join(self._choice(SUFFIX_ALPHABET) for _ in range(SUFFIX_LENGTH))
        return f"{self.prefix}-{millis}-{suffix.upper()}"
