from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobtracker.database import Base


class PastActionNotification(Base):
    """A lapsed next-action date awaiting (or holding) the owner's follow-up answer."""

    __tablename__ = "past_action_notifications"
    __table_args__ = (
        UniqueConstraint("application_id", "action_date", name="uq_past_action_per_date"),
    )

    id = Column(String, primary_key=True, index=True)
    application_id = Column(
        String, ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, index=True
    )
    action_date = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    is_completed = Column(Boolean, nullable=False, default=False)
    completion_response = Column(String)
    responded_at = Column(DateTime(timezone=True))

    application = relationship("Application", back_populates="past_action_notifications")
