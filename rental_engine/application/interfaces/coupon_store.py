from typing import Protocol


class PendingCouponStore(Protocol):
    """
    Client-persisted "pending coupon" (e.g. a code won on the promo wheel).

    Read once when the booking form mounts and cleared once the coupon is
    consumed by a successful booking.
    """

    def get(self) -> str | None:
        ...

    def set(self, code: str) -> None:
        ...

    def clear(self) -> None:
        ...
