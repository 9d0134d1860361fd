"""Domain entities.

Pure domain models; no ORM or persistence concerns.
"""

from humanika.domain.entities.approval_record import ApprovalRecordEntity

__all__ = [
    "ApprovalRecordEntity",
]
