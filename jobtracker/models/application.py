from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobtracker.core.constants import ApplicationStatus, PositionType
from jobtracker.database import Base


class Application(Base):
    """One job application ("company" on the wire), owned by a single user."""

    __tablename__ = "applications"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    company_name = Column(String, nullable=False)
    status = Column(String, nullable=False, default=ApplicationStatus.APPLIED.value)
    position_type = Column(String, nullable=False, default=PositionType.FULL_TIME.value)
    position_title = Column(String)
    application_date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    next_action_date = Column(DateTime(timezone=True), index=True)
    interview_rounds = Column(Integer, nullable=False, default=0)
    notes = Column(String(1000))
    salary_expectation = Column(Float)
    application_platform = Column(String)
    contact_person = Column(String)
    location = Column(String)
    bond_years = Column(Float)
    is_private = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", back_populates="applications")
    past_action_notifications = relationship(
        "PastActionNotification",
        back_populates="application",
        cascade="all, delete-orphan",
        order_by="PastActionNotification.created_at",
    )
