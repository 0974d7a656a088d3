"""Order identifier generation and allocation.

Order ids are short random strings drawn from an alphabet without visually
confusable characters. ``OrderIdAllocator`` keeps generating candidates
until one is not already taken, growing the candidate length on repeated
collisions so that the keyspace expands instead of retrying forever in a
crowded one.
"""

import logging
import secrets
from typing import Callable

from .domain import OrderIdExhaustedError

logger = logging.getLogger(__name__)

# 32 symbols: digits and uppercase letters without 0, O, 1 and I
DEFAULT_CHARSET = "23456789ABCDEFGHJKLMNPQRSTUVWXYZ"

DEFAULT_LENGTH = 8
DEFAULT_MAX_ATTEMPTS = 10


def generate_order_id(length: int, charset: str = DEFAULT_CHARSET) -> str:
    """Return ``length`` characters drawn uniformly from ``charset``.

    Characters are picked with :mod:`secrets` because order ids are shown
    to customers and must not be guessable.

    Args:
        length: Number of characters to produce. Zero yields ``""``.
        charset: Alphabet to draw from.

    Returns:
        str: The random identifier.

    Raises:
        ValueError: If ``length`` is negative or ``charset`` is empty.
    """
    if length < 0:
        raise ValueError("length must be >= 0")
    if not charset:
        raise ValueError("charset must not be empty")
    return "".join(secrets.choice(charset) for _ in range(length))


def effective_length(attempt: int, base_length: int) -> int:
    """Candidate length for a zero-based ``attempt``.

    Attempts 0 and 1 use ``base_length``; from attempt 2 on, each attempt
    adds one more character.
    """
    return base_length + max(attempt - 1, 0)


class OrderIdAllocator:
    """Produce order ids that are not yet used by any stored order.

    Args:
        is_taken: Callable returning True when a candidate id already
            exists (usually ``UniquenessOracle.order_id_exists``).
        generate: Callable ``(length) -> str`` producing a candidate.
        base_length: Default length of the first candidates.
        max_attempts: Default number of candidates tried per allocation.
    """

    def __init__(
        self,
        is_taken: Callable[[str], bool],
        generate: Callable[[int], str] = generate_order_id,
        base_length: int = DEFAULT_LENGTH,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        self.is_taken = is_taken
        self.generate = generate
        self.base_length = base_length
        self.max_attempts = max_attempts

    def allocate(self, base_length: int | None = None, max_attempts: int | None = None) -> str:
        """Return a free order id.

        Args:
            base_length: Length of the first candidates. Defaults to the
                allocator's ``base_length``.
            max_attempts: Number of candidates to try before giving up.
                Defaults to the allocator's ``max_attempts``.

        Returns:
            str: A candidate the store does not contain yet.

        Raises:
            ValueError: If ``base_length`` or ``max_attempts`` is below 1.
            OrderIdExhaustedError: When every candidate collided.
        """
        base_length = self.base_length if base_length is None else base_length
        max_attempts = self.max_attempts if max_attempts is None else max_attempts
        if base_length < 1:
            raise ValueError("base_length must be >= 1")
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

        for attempt in range(max_attempts):
            candidate = self.generate(effective_length(attempt, base_length))
            if not self.is_taken(candidate):
                return candidate
            logger.warning(
                "Order ID %s already exists, retry attempt %d/%d",
                candidate, attempt + 1, max_attempts,
            )

        logger.error(
            "Failed to generate unique order ID after %d attempts",
            max_attempts,
            extra={"attempts": max_attempts, "base_length": base_length},
        )
        raise OrderIdExhaustedError(max_attempts)
