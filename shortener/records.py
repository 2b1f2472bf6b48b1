"""Record store: the single authority over URL records in the key-value store."""

import logging
from typing import Optional

from .errors import NotFoundError, ValidationError
from .models import URLRecord
from .slugs import SlugGenerator
from .store.base import KVStoreBase
from .common.validators import is_valid_slug, validate, validate_slug


SLUG_IN_USE_MESSAGE = "Slug in use."


class RecordStore:
    """Create, resolve and count visits on URL records.

    Every method suspends only on store calls. Click counting is a
    read-modify-write and can lose increments under concurrent visits;
    creation uses a conditional put so a slug is never silently overwritten.
    """

    def __init__(
        self,
        store: KVStoreBase,
        generator: Optional[SlugGenerator] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize record store.

        Args:
            store: Key-value store client
            generator: Optional slug generator
            logger: Optional logger
        """
        self.store = store
        self.generator = generator or SlugGenerator()
        self.logger = logger or logging.getLogger(__name__)

    async def create_record(self, requested_slug: Optional[str], url: Optional[str]) -> URLRecord:
        """Create a new short link.

        A generated slug that loses the conditional put to another writer is
        replaced by a fresh candidate within the generator's attempt budget.

        Args:
            requested_slug: Optional custom slug (case-insensitive)
            url: The URL to shorten

        Returns:
            The stored record

        Raises:
            ValidationError: Malformed input or requested slug already in use
            StoreUnavailableError: Store failure
            GenerationExhaustedError: No free slug found
        """
        if requested_slug is None or requested_slug == "":
            record = await self.generator.generate_unique(
                self.store.exists,
                claim=lambda slug: self._put_new(slug, url),
            )
        else:
            slug = validate_slug(requested_slug)
            if await self.store.get(slug) is not None:
                raise ValidationError(SLUG_IN_USE_MESSAGE, field="slug", reason="in_use")

            record = await self._put_new(slug, url)
            if record is None:
                self.logger.warning("Lost creation race", extra={"slug": slug})
                raise ValidationError(SLUG_IN_USE_MESSAGE, field="slug", reason="in_use")

        self.logger.info(
            f"Created short URL: {record.slug} -> {record.url}",
            extra={"slug": record.slug},
        )
        return record

    async def _put_new(self, slug: str, url: Optional[str]) -> Optional[URLRecord]:
        """Validate and write a fresh record unless the slug is already stored."""
        validated = validate(slug, url)
        record = URLRecord(
            slug=validated.slug,
            url=validated.url,
            secret=self.generator.generate_secret(),
            clicks=0,
        )
        if not await self.store.set(record.slug, record.to_dict(), only_if_absent=True):
            return None
        return record

    async def get_record(self, slug: str) -> URLRecord:
        """Get the full record for a slug without side effects.

        Raises:
            NotFoundError: No record under the slug
        """
        key = self._lookup_key(slug)
        data = await self.store.get(key) if key else None
        if not isinstance(data, dict) or "url" not in data:
            self.logger.debug("Slug not found", extra={"slug": slug})
            raise NotFoundError(slug)
        return URLRecord.from_dict(data, slug=key)

    async def resolve_for_display(self, slug: str) -> str:
        """Return the stored URL without counting a visit."""
        record = await self.get_record(slug)
        return record.url

    async def resolve_and_count_visit(self, slug: str) -> str:
        """Return the stored URL and add one click to the record."""
        record = await self.get_record(slug)
        visited = record.with_visit()
        await self.store.set(visited.slug, visited.to_dict())
        self.logger.debug(
            f"Visit {visited.slug} -> {visited.url}",
            extra={"slug": visited.slug, "clicks": visited.clicks},
        )
        return visited.url

    async def health_check(self) -> bool:
        return await self.store.health_check()

    async def close(self) -> None:
        await self.store.close()

    @staticmethod
    def _lookup_key(slug: str) -> Optional[str]:
        """Case-fold a slug for lookup; None if it could never be stored."""
        if not is_valid_slug(slug):
            return None
        return slug.lower()
