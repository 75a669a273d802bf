"""
Hierarchical ticket field configuration for a multi-tenant helpdesk.

Ticket fields and their option sets resolve per customer, then per tenant,
then from the built-in system catalog.
"""

__version__ = '1.0.0'
