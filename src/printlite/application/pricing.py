# src/printlite/application/pricing.py
"""
Pricing Engine - Print Job Price Calculation

This module holds the one canonical rate table for PrintLite and the engine
that turns a billable page count plus print settings into a PriceBreakdown.
The engine is pure: the same inputs always give the same breakdown.

Pricing rules (INR):
- Per-page rate by colour mode and sides. Double-sided rates are per physical
  sheet (two pages) and come from their own table; an odd final page on a
  double-sided job is billed at the single-sided rate.
- Paper surcharge is added to the rate of every billed unit (page or sheet).
- The per-copy cost is multiplied by the number of copies.
- Binding is a flat fee added once per order after the copies multiplication
  (or per copy when ``binding_per_copy`` is enabled).
- Checkout prices carry 18% GST; quick quotes omit tax.
- Amounts are rounded half-up to 2 decimal places.

Files that USE this module:
- printlite.application.order_service (prices orders at creation)
- printlite.adapters.api.handlers (quick quotes)
- printlite.app (wires PricingEngine with settings)
- tests.test_pricing (unit tests)

Files that this module USES:
- printlite.domain.models (PrintSettings, PriceBreakdown and option enums)
- printlite.domain.errors (ValidationError, InvariantViolation)
"""
from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from printlite.domain.errors import InvariantViolation, ValidationError
from printlite.domain.models import (
    CURRENCY,
    Binding,
    ColorMode,
    PaperType,
    PriceBreakdown,
    PrintSettings,
    Sides,
)

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
TAX_RATE = Decimal("0.18")  # 18% GST

SINGLE_SIDED_RATES = {
    ColorMode.BLACK_AND_WHITE: Decimal("1.50"),
    ColorMode.COLOR: Decimal("4.00"),
}

# Price of one physical sheet printed on both sides
DOUBLE_SIDED_RATES = {
    ColorMode.BLACK_AND_WHITE: Decimal("2.50"),
    ColorMode.COLOR: Decimal("8.00"),
}

PAPER_SURCHARGES = {
    PaperType.STANDARD: Decimal("0.00"),
    PaperType.PREMIUM: Decimal("0.50"),
    PaperType.GLOSSY: Decimal("1.00"),
}

BINDING_FEES = {
    Binding.NONE: Decimal("0.00"),
    Binding.SPIRAL: Decimal("25.00"),
    Binding.STAPLE: Decimal("5.00"),
}


def round2(value: Decimal) -> Decimal:
    """Round a monetary amount half-up to whole paise."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


class PricingEngine:
    """
    Computes price breakdowns from the canonical rate table.

    Args:
        binding_per_copy: Charge binding once per copy instead of once per order
        tax_rate: GST rate applied on the checkout path
    """

    def __init__(self, binding_per_copy: bool = False, tax_rate: Decimal = TAX_RATE):
        self.binding_per_copy = binding_per_copy
        self.tax_rate = tax_rate

    def unit_cost(self, page_count: int, settings: PrintSettings) -> Decimal:
        """
        Cost of printing one copy of ``page_count`` pages, before binding.

        Args:
            page_count: Billable pages per copy
            settings: Print settings (colour mode, sides and paper tier are used)

        Returns:
            Unrounded cost of one copy
        """
        surcharge = PAPER_SURCHARGES[settings.paper_type]
        single_rate = SINGLE_SIDED_RATES[settings.color_mode] + surcharge

        if settings.sides is Sides.SINGLE:
            return page_count * single_rate

        sheets, odd_pages = divmod(page_count, 2)
        double_rate = DOUBLE_SIDED_RATES[settings.color_mode] + surcharge
        return sheets * double_rate + odd_pages * single_rate

    def binding_fee(self, settings: PrintSettings) -> Decimal:
        fee = BINDING_FEES[settings.binding]
        if self.binding_per_copy:
            fee = fee * settings.copies
        return fee

    def compute_price(
        self,
        page_count: int,
        settings: PrintSettings,
        include_tax: bool = True,
    ) -> PriceBreakdown:
        """
        Compute the price of a print job.

        Args:
            page_count: Billable pages per copy (selected pages)
            settings: Print settings; ``copies`` multiplies the per-copy cost
            include_tax: Apply GST (checkout path) or not (quick-quote path)

        Returns:
            PriceBreakdown with subtotal, tax and total rounded to 2 decimals

        Raises:
            ValidationError: If page_count or copies is below 1
            InvariantViolation: If a computed amount is negative
        """
        if isinstance(page_count, bool) or not isinstance(page_count, int):
            raise ValidationError(f"Page count must be an integer (got {page_count!r})", field="pages")
        if page_count < 1:
            raise ValidationError(f"At least one page must be selected (got {page_count})", field="pages")
        if settings.copies < 1:
            raise ValidationError(f"Copies must be at least 1 (got {settings.copies})", field="copies")

        unit_cost = self.unit_cost(page_count, settings)
        binding_fee = self.binding_fee(settings)
        subtotal = round2(unit_cost * settings.copies + binding_fee)

        if include_tax:
            tax_rate = self.tax_rate
            tax_amount = round2(subtotal * tax_rate)
        else:
            tax_rate = ZERO
            tax_amount = ZERO
        total = subtotal + tax_amount

        if min(subtotal, tax_amount, total) < 0:
            raise InvariantViolation(
                f"Negative price computed: subtotal={subtotal} tax={tax_amount} total={total}"
            )

        logger.debug(
            "Priced %d pages x %d copies (%s, %s, %s, binding=%s): subtotal=%s tax=%s total=%s",
            page_count, settings.copies, settings.color_mode.value, settings.sides.value,
            settings.paper_type.value, settings.binding.value, subtotal, tax_amount, total,
        )

        return PriceBreakdown(
            subtotal=subtotal,
            tax_amount=tax_amount,
            total=total,
            tax_rate=tax_rate,
            tax_included=include_tax,
            page_count=page_count,
            copies=settings.copies,
            unit_cost=round2(unit_cost),
            binding_fee=round2(binding_fee),
            currency=CURRENCY,
        )

    def quote(self, page_count: int, settings: PrintSettings) -> PriceBreakdown:
        """Quick quote: same rates, no tax."""
        return self.compute_price(page_count, settings, include_tax=False)


# Global pricing engine instance (binding charged once per order)
pricing_engine = PricingEngine()


def compute_price(
    page_count: int,
    settings: PrintSettings,
    include_tax: bool = True,
    engine: Optional[PricingEngine] = None,
) -> PriceBreakdown:
    """Compute a price with the given engine, or the global one."""
    return (engine or pricing_engine).compute_price(page_count, settings, include_tax=include_tax)
