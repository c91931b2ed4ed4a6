"""
Shopify error taxonomy.

The Admin API layers its failures: HTTP transport, GraphQL execution
(top-level ``errors``) and business-rule validation on mutations
(``userErrors``). Each layer gets its own exception so callers can tell
"network/auth broken" from "bad query" from "rejected input".
"""

from typing import Any, Dict, List, Optional


class ShopifyError(Exception):
    """Base exception for everything raised by the request pipeline."""

    error_type = "shopify"

    def __init__(self, message: str, details: Dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ShopifyConfigError(ShopifyError):
    """Credentials or request envelope unusable; raised before any network call."""

    error_type = "configuration"


class ShopifyTransportError(ShopifyError):
    """Non-2xx HTTP response, or the request never got a response."""

    error_type = "transport"

    def __init__(self, status_code: Optional[int], body: Any):
        self.status_code = status_code
        self.body = body
        if status_code is None:
            message = f"Shopify request failed: {body}"
        else:
            message = f"Shopify HTTP error ({status_code}): {_summarize(body)}"
        super().__init__(message, {"status_code": status_code, "body": body})


class ShopifyProtocolError(ShopifyError):
    """HTTP succeeded but the GraphQL response carried top-level errors."""

    error_type = "protocol"

    def __init__(self, status_code: int, errors: List[Dict[str, Any]]):
        self.status_code = status_code
        self.errors = errors
        messages = "; ".join(str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors)
        super().__init__(
            f"Shopify GraphQL error: {messages}",
            {"status_code": status_code, "errors": errors},
        )


class ShopifyUserError(ShopifyError):
    """A mutation rejected its input through ``userErrors``."""

    error_type = "user_errors"

    def __init__(self, user_errors: List[Dict[str, Any]], input_payload: Any = None):
        self.user_errors = user_errors
        self.input_payload = input_payload
        parts = []
        for err in user_errors:
            field = err.get("field")
            if isinstance(field, list):
                field = ".".join(str(f) for f in field)
            parts.append(f"{field}: {err.get('message')}" if field else str(err.get("message")))
        super().__init__(
            f"Shopify rejected the input: {'; '.join(parts)}",
            {"user_errors": user_errors, "input": input_payload},
        )


class ShopifyNotFoundError(ShopifyError):
    """The queried entity is absent from the result set."""

    error_type = "not_found"

    def __init__(self, resource: str, identifier: Any, message: str = None):
        self.resource = resource
        self.identifier = identifier
        super().__init__(
            message or f"{resource} with ID {identifier} not found",
            {"resource": resource, "id": identifier},
        )


def _summarize(body: Any) -> str:
    if isinstance(body, dict):
        for key in ("errors", "error", "message"):
            if key in body:
                return str(body[key])
    return str(body)[:500]
