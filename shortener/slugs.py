"""Slug and secret generation."""

import logging
import random
import secrets
import string
from typing import Any, Awaitable, Callable, Optional

from .errors import GenerationExhaustedError


class SlugGenerator:
    """Generate random slugs and record secrets."""

    # URL-safe alphabet (same character class the validator accepts)
    ALPHABET = string.ascii_letters + string.digits + "_-"

    def __init__(
        self,
        slug_length: int = 5,
        secret_length: int = 10,
        max_attempts: int = 10,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize slug generator.

        Args:
            slug_length: Length of generated slugs
            secret_length: Length of record secrets
            max_attempts: Store lookups allowed before giving up
            logger: Optional logger
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.slug_length = slug_length
        self.secret_length = secret_length
        self.max_attempts = max_attempts
        self.logger = logger or logging.getLogger(__name__)

    def generate_random(self, length: Optional[int] = None) -> str:
        """Generate a random lower-case slug candidate."""
        length = length or self.slug_length
        return "".join(random.choices(self.ALPHABET, k=length)).lower()

    def generate_secret(self, length: Optional[int] = None) -> str:
        """Generate an opaque record secret from a secure source."""
        length = length or self.secret_length
        return "".join(secrets.choice(self.ALPHABET) for _ in range(length))

    async def generate_unique(
        self,
        exists: Callable[[str], Awaitable[bool]],
        claim: Optional[Callable[[str], Awaitable[Any]]] = None,
    ) -> Any:
        """Generate a slug for which ``exists`` returns False.

        When ``claim`` is given it is awaited with each free candidate and
        must return None if another writer took the slug first. A lost claim
        uses up an attempt like a collision does.

        Args:
            exists: Async predicate backed by the store
            claim: Optional async reservation of a free candidate

        Returns:
            A free slug, or the claim's result when ``claim`` is given

        Raises:
            GenerationExhaustedError: after ``max_attempts`` collisions
        """
        for attempt in range(1, self.max_attempts + 1):
            candidate = self.generate_random()
            if await exists(candidate):
                self.logger.debug(f"Slug collision on attempt {attempt}: {candidate}")
                continue

            result = candidate if claim is None else await claim(candidate)
            if result is not None:
                if attempt > 1:
                    self.logger.debug(f"Generated slug after {attempt} attempts: {candidate}")
                return result
            self.logger.debug(f"Lost claim on attempt {attempt}: {candidate}")

        self.logger.error(f"Slug generation exhausted after {self.max_attempts} attempts")
        raise GenerationExhaustedError(self.max_attempts)
