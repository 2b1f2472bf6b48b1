"""URL building utilities for URL shortener."""


def build_short_url(slug: str, domain: str, production: bool = False) -> str:
    """Build the public short URL for a slug.

    Args:
        slug: The slug
        domain: Public domain (optionally with port), e.g. sho.rt
        production: Use https when True, http otherwise

    Returns:
        Complete short URL, e.g. https://sho.rt/abc12
    """
    scheme = "https" if production else "http"
    return f"{scheme}://{domain.strip('/')}/{slug}"
