from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from skyway.models.enums import TravelClass

DEFAULT_TAX_RATE = Decimal('0.13')
DEFAULT_SERVICE_FEE_RATE = Decimal('0.04')

CENTS = Decimal('0.01')


class PricingError(ValueError):
    """Raised for negative fares or rates outside [0, 1)"""


def to_decimal(value) -> Decimal:
    """Convert a float/int/str amount to Decimal via its string form"""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _check_rate(name: str, rate: Optional[Decimal]) -> Optional[Decimal]:
    if rate is None:
        return None
    rate = to_decimal(rate)
    if rate < 0 or rate >= 1:
        raise PricingError(f"{name} must be in [0, 1), got {rate}")
    return rate


@dataclass(frozen=True)
class RateConfiguration:
    """Tax and service-fee rates as fractions of the base fare.

    A rate left as None falls back to its default; an explicit zero is kept.
    """

    tax_rate: Optional[Decimal] = None
    service_fee_rate: Optional[Decimal] = None

    def __post_init__(self):
        object.__setattr__(self, 'tax_rate', _check_rate('tax_rate', self.tax_rate))
        object.__setattr__(
            self, 'service_fee_rate', _check_rate('service_fee_rate', self.service_fee_rate)
        )

    @property
    def effective_tax_rate(self) -> Decimal:
        return DEFAULT_TAX_RATE if self.tax_rate is None else self.tax_rate

    @property
    def effective_service_fee_rate(self) -> Decimal:
        return DEFAULT_SERVICE_FEE_RATE if self.service_fee_rate is None else self.service_fee_rate

    @classmethod
    def from_account(cls, account) -> 'RateConfiguration':
        """Build from a PaymentAccount (or None for all defaults)"""
        if account is None:
            return cls()
        return cls(tax_rate=account.tax_rate, service_fee_rate=account.service_fee_rate)


@dataclass(frozen=True)
class PriceBreakdown:
    base_price: Decimal
    tax_amount: Decimal
    service_fee_amount: Decimal
    total_price: Decimal

    def to_dict(self):
        """Two-decimal presentation of the breakdown"""
        def money(amount):
            return float(amount.quantize(CENTS, rounding=ROUND_HALF_UP))

        return {
            'basePrice': money(self.base_price),
            'taxAmount': money(self.tax_amount),
            'serviceFeeAmount': money(self.service_fee_amount),
            'totalPrice': money(self.total_price)
        }


class PricingCalculator:
    """Calculate displayed flight prices"""

    @staticmethod
    def compute_total(base_price, rates: Optional[RateConfiguration] = None) -> PriceBreakdown:
        """Apply tax and service fee to a base fare.

        Negative fares are rejected rather than clamped.
        """
        base = to_decimal(base_price)
        if base < 0:
            raise PricingError(f"Base price cannot be negative, got {base}")

        rates = rates or RateConfiguration()
        tax_amount = base * rates.effective_tax_rate
        service_fee_amount = base * rates.effective_service_fee_rate

        return PriceBreakdown(
            base_price=base,
            tax_amount=tax_amount,
            service_fee_amount=service_fee_amount,
            total_price=base + tax_amount + service_fee_amount
        )

    @staticmethod
    def base_fare_for_class(flight, travel_class: Optional[str] = None) -> Decimal:
        """Pick the flight's fare for a travel class (Economy when unset)"""
        try:
            travel_class = TravelClass(travel_class or TravelClass.ECONOMY)
        except ValueError:
            raise PricingError(f"Unknown travel class: {travel_class}")

        fares = {
            TravelClass.ECONOMY: flight.economy_price,
            TravelClass.BUSINESS: flight.business_price,
            TravelClass.FIRST_CLASS: flight.first_class_price,
        }
        return to_decimal(fares[travel_class])

    @staticmethod
    def price_flight(flight, rates: Optional[RateConfiguration] = None,
                     travel_class: Optional[str] = None) -> PriceBreakdown:
        base = PricingCalculator.base_fare_for_class(flight, travel_class)
        return PricingCalculator.compute_total(base, rates)
