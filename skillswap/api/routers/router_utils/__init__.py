"""
Router utility functions.

Contains helpers shared by the endpoint modules.
"""

from skillswap.api.routers.router_utils.error_handling import handle_service_errors

__all__ = ["handle_service_errors"]
