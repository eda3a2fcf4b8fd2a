from enum import Enum


class ContributionStatus(str, Enum):
    PENDING = 'pending'
    APPROVED = 'approved'
    REJECTED = 'rejected'

    @classmethod
    def values(cls) -> list[str]:
        return [s.value for s in cls]


__all__ = ['ContributionStatus']
