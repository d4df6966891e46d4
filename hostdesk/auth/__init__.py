"""Staff authentication context"""

from hostdesk.auth.session import StaffSession, token_expired

__all__ = ["StaffSession", "token_expired"]
