"""Data models for URL shortener."""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class URLRecord:
    """A short link as persisted in the key-value store under its slug."""

    slug: str
    url: str
    secret: str
    clicks: int = 0

    def to_dict(self) -> dict:
        """Convert to the stored JSON object."""
        return {
            "url": self.url,
            "slug": self.slug,
            "secret": self.secret,
            "clicks": self.clicks,
        }

    @classmethod
    def from_dict(cls, data: dict, slug: str = "") -> "URLRecord":
        """Create from a stored JSON object.

        ``clicks`` that is missing, negative or not an integer reads as 0.
        """
        clicks = data.get("clicks", 0)
        if isinstance(clicks, bool) or not isinstance(clicks, int) or clicks < 0:
            clicks = 0
        return cls(
            slug=data.get("slug") or slug,
            url=data["url"],
            secret=data.get("secret", ""),
            clicks=clicks,
        )

    def with_visit(self) -> "URLRecord":
        """Return a copy with one more click."""
        return replace(self, clicks=self.clicks + 1)
