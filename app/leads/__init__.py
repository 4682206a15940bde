"""
Lead capture: newsletter signups and sales inquiries.
"""

from .router import router
from .service import count_subscribers, list_sales_leads, submit_sales_lead, subscribe

__all__ = [
    "router",
    "subscribe",
    "count_subscribers",
    "submit_sales_lead",
    "list_sales_leads",
]
