from datetime import date, time
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, condecimal, constr

from rental_engine.domain.entities.price_breakdown import LineItem, PriceBreakdown
from rental_engine.domain.entities.rental_request import RentalRequest

Money = condecimal(max_digits=12, decimal_places=2)


class RentalRequestPayload(BaseModel):
    """Booking form values; every field may still be empty while the user types."""

    model_config = ConfigDict(extra="forbid")

    vehicle_id: constr(strip_whitespace=True, min_length=1)
    pickup_date: date | None = None
    pickup_time: time | None = None
    return_date: date | None = None
    return_time: time | None = None
    pickup_location: str | None = None
    dropoff_location: str | None = None
    insurance_type: str | None = None
    discount_code: str | None = None
    customer_phone: str | None = None

    def to_domain(self) -> RentalRequest:
        return RentalRequest(
            vehicle_id=self.vehicle_id,
            pickup_date=self.pickup_date,
            pickup_time=self.pickup_time,
            return_date=self.return_date,
            return_time=self.return_time,
            pickup_location=self.pickup_location,
            dropoff_location=self.dropoff_location,
            insurance_kind=self.insurance_type,
            discount_code=self.discount_code,
            customer_phone=self.customer_phone,
        )


class LineItemModel(BaseModel):
    model_config = ConfigDict(json_encoders={Decimal: lambda v: format(v, ".2f")})

    key: str
    amount: Money
    detail: str | None = None


class PriceBreakdownModel(BaseModel):
    model_config = ConfigDict(json_encoders={Decimal: lambda v: format(v, ".2f")})

    days: int = Field(ge=1)
    per_day_rate: Money
    base_price: Money
    location_fee: Money
    insurance_cost: Money
    outside_hours_fee: Money
    subtotal: Money
    discount_amount: Money
    final_price: Money
    currency_code: constr(strip_whitespace=True, min_length=3, max_length=3) = "EUR"
    discount_code: str | None = None
    line_items: list[LineItemModel] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, breakdown: PriceBreakdown) -> "PriceBreakdownModel":
        return cls(
            days=breakdown.days,
            per_day_rate=breakdown.per_day_rate,
            base_price=breakdown.base_price,
            location_fee=breakdown.location_fee,
            insurance_cost=breakdown.insurance_cost,
            outside_hours_fee=breakdown.outside_hours_fee,
            subtotal=breakdown.subtotal,
            discount_amount=breakdown.discount_amount,
            final_price=breakdown.final_price,
            currency_code=breakdown.currency_code,
            discount_code=breakdown.discount_code,
            line_items=[
                LineItemModel(key=item.key, amount=item.amount, detail=item.detail)
                for item in breakdown.line_items
            ],
        )

    def to_domain(self) -> PriceBreakdown:
        return PriceBreakdown(
            days=self.days,
            per_day_rate=self.per_day_rate,
            base_price=self.base_price,
            location_fee=self.location_fee,
            insurance_cost=self.insurance_cost,
            outside_hours_fee=self.outside_hours_fee,
            subtotal=self.subtotal,
            discount_amount=self.discount_amount,
            final_price=self.final_price,
            currency_code=self.currency_code,
            discount_code=self.discount_code,
            line_items=tuple(
                LineItem(key=item.key, amount=item.amount, detail=item.detail)
                for item in self.line_items
            ),
        )


class QuoteResponse(BaseModel):
    computable: bool
    missing: list[str] = Field(default_factory=list)
    breakdown: PriceBreakdownModel | None = None


class VerifyPriceRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    request: RentalRequestPayload
    breakdown: PriceBreakdownModel


class VerifyPriceResponse(BaseModel):
    matches: bool
    mismatched_fields: list[str]
    recomputed: PriceBreakdownModel | None = None
