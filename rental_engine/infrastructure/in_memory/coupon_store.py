class InMemoryPendingCouponStore:
    """Pending coupon slot kept in process memory (the browser keeps it in localStorage)."""

    def __init__(self, code: str | None = None) -> None:
        self.code = code

    def get(self) -> str | None:
        return self.code

    def set(self, code: str) -> None:
        self.code = code

    def clear(self) -> None:
        self.code = None
