"""Shared router helpers."""

from mathprep.api.routers.router_utils.error_handling import handle_domain_errors

__all__ = ["handle_domain_errors"]
