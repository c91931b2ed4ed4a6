"""
Tagged result for mutation responses.

Every Shopify mutation nests its own ``userErrors`` list under a
mutation-specific key. ``MutationResult`` decodes that shape once per
call site so the handlers never re-parse it by hand.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .errors import ShopifyProtocolError, ShopifyUserError


@dataclass
class MutationResult:
    """Either ``data`` (the mutation payload) or ``user_errors``."""
    mutation: str
    data: Optional[Dict[str, Any]] = None
    user_errors: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.user_errors

    @classmethod
    def from_payload(cls, data: Dict[str, Any], mutation: str,
                     errors_key: str = "userErrors") -> "MutationResult":
        """Decode ``data[mutation]``; media mutations report under ``mediaUserErrors``."""
        payload = (data or {}).get(mutation)
        if payload is None:
            raise ShopifyProtocolError(200, [{"message": f"Mutation {mutation} returned no payload"}])

        user_errors = payload.get(errors_key) or []
        if user_errors:
            return cls(mutation=mutation, user_errors=list(user_errors))
        return cls(mutation=mutation, data=payload)

    def unwrap(self, input_payload: Any = None) -> Dict[str, Any]:
        """Return the payload, raising ``ShopifyUserError`` on user errors."""
        if self.user_errors:
            raise ShopifyUserError(self.user_errors, input_payload)
        return self.data
