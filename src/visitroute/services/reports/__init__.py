"""Route report exports."""

from .route_report import Report, generate_report

__all__ = ["Report", "generate_report"]
