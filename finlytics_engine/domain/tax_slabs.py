"""Progressive tax-slab engine - category-aware thresholds, year-keyed slab tables"""

import logging
from decimal import Decimal, ROUND_CEILING
from types import MappingProxyType
from typing import List, Mapping

from finlytics_engine.domain.fiscal_calendar import assessment_year
from finlytics_engine.domain.models import BreakdownRow, TaxResult, TaxSlab, TaxSlabConfig

logger = logging.getLogger(__name__)

DEFAULT_FISCAL_YEAR = "2024-2025"
DEFAULT_TAXPAYER_CATEGORY = "general"

TAXPAYER_CATEGORIES = (
    "general",
    "female",
    "senior_citizen",
    "physically_challenged",
    "freedom_fighter",
)

BASE_CONFIG = TaxSlabConfig(
    thresholds=MappingProxyType(
        {
            "general": 350_000,
            "female": 400_000,
            "senior_citizen": 400_000,
            "physically_challenged": 475_000,
            "freedom_fighter": 500_000,
        }
    ),
    slabs=(
        TaxSlab(width=100_000, rate=0.05),
        TaxSlab(width=300_000, rate=0.10),
        TaxSlab(width=400_000, rate=0.15),
        TaxSlab(width=500_000, rate=0.20),
        TaxSlab(width=None, rate=0.25),
    ),
    minimum_tax=5_000,
)

# Identical today; kept year-keyed so a finance act can change one year only
TAX_CONFIGS: Mapping[str, TaxSlabConfig] = MappingProxyType(
    {
        "2023-2024": BASE_CONFIG,
        "2024-2025": BASE_CONFIG,
        "2025-2026": BASE_CONFIG,
        "2026-2027": BASE_CONFIG,
    }
)


def get_tax_config(fiscal_year: str) -> TaxSlabConfig:
    """Slab configuration for a fiscal year, base config when none is registered"""
    return TAX_CONFIGS.get(fiscal_year, BASE_CONFIG)


def supported_fiscal_years() -> List[str]:
    """Fiscal years with a registered slab configuration, oldest first"""
    return list(TAX_CONFIGS)


def resolve_threshold(config: TaxSlabConfig, taxpayer_category: str | None) -> tuple[str, int]:
    """
    Tax-free threshold for a taxpayer category.

    Unknown or missing categories are treated as general, without error.
    """
    if taxpayer_category in config.thresholds:
        return taxpayer_category, config.thresholds[taxpayer_category]
    return DEFAULT_TAXPAYER_CATEGORY, config.thresholds[DEFAULT_TAXPAYER_CATEGORY]


def calculate_tax(
    total_income: float,
    total_deductible_expenses: float,
    taxpayer_category: str | None = None,
    fiscal_year: str = DEFAULT_FISCAL_YEAR,
) -> TaxResult:
    """
    Compute taxable income and progressive tax payable with a slab breakdown.

    Algorithm:
    - taxable income = max(0, income - deductible expenses)
    - first `threshold` of it is tax-free (always the first breakdown row)
    - the rest walks the slab widths cumulatively until nothing remains
    - total tax is rounded UP to a whole currency unit

    Raises:
        InvalidFiscalYearError: fiscal_year is not a valid YYYY-YYYY label

    Example:
        calculate_tax(500000, 40000, "general", "2024-2025")
        taxable 460000 → 350000 @ 0% + 100000 @ 5% + 10000 @ 10% → 6000
    """
    config = get_tax_config(fiscal_year)
    assessment = assessment_year(fiscal_year)

    taxable_income = max(0, total_income - total_deductible_expenses)
    category, threshold = resolve_threshold(config, taxpayer_category)

    remaining = taxable_income
    tax_payable = Decimal(0)

    tax_free_amount = min(remaining, threshold)
    breakdown = [BreakdownRow(label=f"First {threshold}", amount=tax_free_amount, rate=0, tax=0)]
    remaining -= tax_free_amount

    for slab in config.slabs:
        if remaining <= 0:
            break

        amount = remaining if slab.width is None else min(remaining, slab.width)
        # Decimal keeps 0.1-style rates exact so the ceiling never rounds up float noise
        slab_tax = Decimal(str(amount)) * Decimal(str(slab.rate))
        tax_payable += slab_tax
        remaining -= amount

        breakdown.append(
            BreakdownRow(
                label="Rest" if slab.width is None else f"Next {slab.width}",
                amount=amount,
                rate=slab.rate,
                tax=float(slab_tax),
            )
        )

    result = TaxResult(
        fiscal_year=fiscal_year,
        assessment_year=assessment,
        total_income=total_income,
        total_deductible_expenses=total_deductible_expenses,
        taxable_income=taxable_income,
        taxpayer_category=category,
        tax_free_threshold=threshold,
        tax_payable=int(tax_payable.to_integral_value(rounding=ROUND_CEILING)),
        breakdown=breakdown,
    )
    logger.debug(
        "Tax computed",
        extra={"fiscal_year": fiscal_year, "taxable_income": taxable_income, "tax_payable": result.tax_payable},
    )
    return result
