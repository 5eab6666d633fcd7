"""Exception types raised by the engine and the listing analysis layer."""

from __future__ import annotations


class InvalidInput(ValueError):
    """A calculation input is out of range or not a finite number."""

    def __init__(self, field: str, value: object, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"invalid {field}={value!r}: {reason}")


class ListingNotFound(LookupError):
    def __init__(self, listing_id: str) -> None:
        self.listing_id = listing_id
        super().__init__(f"Listing not found: {listing_id}")


class PriceUnavailable(LookupError):
    """The listing exists but has no usable price, so no payment can be shown."""

    def __init__(self, listing_id: str) -> None:
        self.listing_id = listing_id
        super().__init__(f"No price available for listing {listing_id}")


__all__ = ["InvalidInput", "ListingNotFound", "PriceUnavailable"]
