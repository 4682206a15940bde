"""
Case Submission Moderation

Public submissions queue as pending and are approved (published as a Case)
or rejected by an admin.
"""

from .router import router
from .workflow import approve, create_submission, list_pending, reject

__all__ = [
    "router",
    "approve",
    "create_submission",
    "list_pending",
    "reject",
]
