"""Interactive dashboard over the committed index."""

from orbit.dashboard.views import DashboardModel, ViewFilter

__all__ = ["DashboardModel", "ViewFilter"]
