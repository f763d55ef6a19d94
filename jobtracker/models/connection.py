from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobtracker.core.constants import ConnectionStatus
from jobtracker.database import Base


def pair_key(user_a: str, user_b: str) -> tuple[str, str]:
    """Canonical (low, high) ordering of an unordered user pair."""
    return (user_a, user_b) if user_a <= user_b else (user_b, user_a)


class Connection(Base):
    """Directed follow request between two users; one row per unordered pair."""

    __tablename__ = "connections"
    __table_args__ = (
        UniqueConstraint("user_low_id", "user_high_id", name="uq_connection_pair"),
    )

    id = Column(String, primary_key=True, index=True)
    requester_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    recipient_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    user_low_id = Column(String, nullable=False)
    user_high_id = Column(String, nullable=False)
    status = Column(String, nullable=False, default=ConnectionStatus.PENDING.value)  # pending | accepted
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    requester = relationship("User", foreign_keys=[requester_id])
    recipient = relationship("User", foreign_keys=[recipient_id])

    def other_party_id(self, user_id: str) -> str:
        return self.recipient_id if self.requester_id == user_id else self.requester_id

    def other_party(self, user_id: str):
        return self.recipient if self.requester_id == user_id else self.requester
