"""Cost-control evaluation against healthy percentage-of-revenue bands"""

from decimal import Decimal
from typing import Dict, Mapping
from sitefinance.domain.models import CostBand, CostControlResult, CostStatus, ProjectFinancials
from sitefinance.domain.ledger import ZERO, to_amount, to_decimal

COST_CATEGORIES = ("material", "labor", "other")


def evaluate_cost(value: Decimal, total: Decimal, band: CostBand) -> CostControlResult:
    """
    Classify a cost category's share of expected revenue.

    - NO_DATA: total is 0 (nothing to compare against)
    - GOOD:    min_good <= percentage <= max_good
    - OVER:    percentage > max_good
    - UNDER:   percentage < min_good (negative shares included)
    """
    # Overlapping material/labor flags can drive "other" below zero: keep the sign
    value = to_decimal(value)
    total = to_amount(total)

    if total == 0:
        return CostControlResult(value=value, percentage=ZERO, status=CostStatus.NO_DATA, band=band)

    percentage = value / total * Decimal("100")

    if band.min_good <= percentage <= band.max_good:
        status = CostStatus.GOOD
    elif percentage > band.max_good:
        status = CostStatus.OVER
    else:
        status = CostStatus.UNDER

    return CostControlResult(value=value, percentage=percentage, status=status, band=band)


def evaluate_project_costs(
    financials: ProjectFinancials,
    bands: Mapping[str, CostBand],
) -> Dict[str, CostControlResult]:
    """Evaluate material, labor and other costs of a project against their bands"""
    values = {
        "material": financials.material_cost,
        "labor": financials.labor_cost,
        "other": financials.other_cost,
    }
    return {
        category: evaluate_cost(values[category], financials.expected_revenue, bands[category])
        for category in COST_CATEGORIES
    }
