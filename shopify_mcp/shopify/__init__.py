"""
Shopify request pipeline.

Rate-limited GraphQL transport, error taxonomy, global-ID codec and the
per-operation Admin API client built on top of them.
"""

from .client import ShopifyClient
from .errors import (
    ShopifyConfigError,
    ShopifyError,
    ShopifyNotFoundError,
    ShopifyProtocolError,
    ShopifyTransportError,
    ShopifyUserError,
)
from .ids import decode_gid, to_gid
from .pipeline import GraphQLPipeline, RateLimiter, ShopifyCredentials
from .result import MutationResult

__all__ = [
    "GraphQLPipeline",
    "MutationResult",
    "RateLimiter",
    "ShopifyClient",
    "ShopifyConfigError",
    "ShopifyCredentials",
    "ShopifyError",
    "ShopifyNotFoundError",
    "ShopifyProtocolError",
    "ShopifyTransportError",
    "ShopifyUserError",
    "decode_gid",
    "to_gid",
]
