"""Short code generation.

Codes only have to be unique, not secret, so the ``random`` module is
enough; uniqueness is checked against the store before a code is handed out.
"""

import logging
import random
from typing import Awaitable, Callable, Optional

from app.core.config import settings
from app.services.exceptions import ShortCodeGenerationError

logger = logging.getLogger(__name__)

ExistsCheck = Callable[[str], Awaitable[bool]]


class ShortCodeGenerator:
    """Draws fixed-length alphanumeric codes until one is not taken."""

    def __init__(
        self,
        length: Optional[int] = None,
        alphabet: Optional[str] = None,
        max_attempts: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Args:
            length: Code length, defaults to URL_CODE_LENGTH
            alphabet: Characters to draw from, defaults to URL_CODE_CHARS
            max_attempts: Existence checks before giving up, defaults to URL_CODE_MAX_ATTEMPTS
            rng: Random source, a fresh ``random.Random`` when omitted
        """
        self.length = length or settings.URL_CODE_LENGTH
        self.alphabet = alphabet or settings.URL_CODE_CHARS
        self.max_attempts = max_attempts or settings.URL_CODE_MAX_ATTEMPTS
        self._rng = rng or random.Random()

    def generate_code(self) -> str:
        """Draw a single candidate code without checking it."""
        return "".join(self._rng.choices(self.alphabet, k=self.length))

    def is_valid_code(self, code: str) -> bool:
        """Check that ``code`` has the generator's length and alphabet."""
        return len(code) == self.length and all(char in self.alphabet for char in code)

    async def generate(self, exists: ExistsCheck) -> str:
        """
        Generate a code that ``exists`` reports as free.

        Args:
            exists: Coroutine function telling whether a code is already in use

        Returns:
            str: A code that was free at the time of the check

        Raises:
            ShortCodeGenerationError: If every attempt collided
        """
        for attempt in range(1, self.max_attempts + 1):
            candidate = self.generate_code()
            if not await exists(candidate):
                return candidate
            logger.warning(f"Short code collision on attempt {attempt}: {candidate}")

        raise ShortCodeGenerationError(
            f"Failed to generate a unique short code after {self.max_attempts} attempts"
        )
