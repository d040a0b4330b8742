"""URL helpers for links scraped from iqdb pages."""


def normalize_url(raw: str) -> str:
    """Turn protocol-relative links (``//host/path``) into ``http:`` URLs.

    Everything else, including root-relative paths, is returned unchanged.
    """
    if raw.startswith("//"):
        return "http:" + raw
    return raw
