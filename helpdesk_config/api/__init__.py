"""
API routers
"""

from helpdesk_config.api import field_configurations

__all__ = ["field_configurations"]
