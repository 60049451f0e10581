from abc import ABC, abstractmethod

from rental_engine.domain.entities.coupon import CouponValidation


class CouponGateway(ABC):
    @abstractmethod
    async def validate(self, code: str, phone: str | None = None) -> CouponValidation:
        """
        Validates a discount code, optionally bound to the customer's phone.

        Returns a CouponValidation for structured answers (valid or not).
        Raises TransientError when the collaborator cannot be reached.
        """
        pass
