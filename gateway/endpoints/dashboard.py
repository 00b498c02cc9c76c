"""Dashboard operation."""

from enrollment.payment.schemas import DashboardResponse
from gateway.deps import Context
from gateway.routing import Router

router = Router()


@router.operation("dashboardStats")
async def get_dashboard_stats(ctx: Context) -> DashboardResponse:
    """
    Get totals for the dashboard.

    Returns:
    - Number of records
    - Total amount owed across records
    - Total amount received across records
    - The five most recently entered payments
    """
    stats = await ctx.payments.get_dashboard_stats()
    return DashboardResponse(
        success=True,
        record_count=stats.record_count,
        total_owed=stats.total_owed,
        total_received=stats.total_received,
        recent_payments=stats.recent_payments,
    )
