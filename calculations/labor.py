"""Labor cost and labor price calculations."""

from typing import Optional, Sequence


def calculate_labor_cost(wages: Sequence[Optional[float]], labor_hours: Optional[float]) -> float:
    """Calculate the wage expense for the hours worked.

    Hours are split evenly across every wage entry, so each worker's wage
    contributes proportionally:

        cost = sum(wage_i * hours / n) = hours * average(wages)

    Args:
        wages: Hourly wage per worker (order is irrelevant)
        labor_hours: Total labor hours on the job

    Returns:
        Labor cost, or 0 when there are no wages or no hours
    """
    hours = float(labor_hours or 0.0)
    if not wages or hours == 0:
        return 0.0

    share = hours / len(wages)
    return sum(float(wage or 0.0) * share for wage in wages)


def calculate_labor_price(labor_hours: Optional[float], target_hourly: Optional[float]) -> float:
    """Calculate the amount billed for labor (hours x billable rate)."""
    return float(labor_hours or 0.0) * float(target_hourly or 0.0)
