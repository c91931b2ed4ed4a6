"""Helpers for Shopify global IDs (``gid://shopify/Type/123``)."""

GID_PREFIX = "gid://shopify/"


def decode_gid(gid: str) -> str:
    """Return the last path segment of a global ID.

    Lossy: the resource type is discarded. No validation is done, a
    malformed value yields whatever follows its last ``/``.
    """
    return gid.split("/")[-1]


def to_gid(resource: str, identifier) -> str:
    """Build a global ID for ``resource``; values already in gid form pass through."""
    identifier = str(identifier)
    if identifier.startswith(GID_PREFIX):
        return identifier
    return f"{GID_PREFIX}{resource}/{identifier}"
