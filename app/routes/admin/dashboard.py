from app.services.dashboard import dashboard_stats
from app.utils import ok
from . import admin_bp


@admin_bp.route("/dashboard/stats", methods=["GET"])
def get_dashboard_stats():
    return ok(dashboard_stats())
