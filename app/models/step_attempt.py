"""StepAttempt model: per-step outcome of the answers behind an attempt's best score."""
from sqlalchemy import Column, Integer, Boolean, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.session import Base


class StepAttempt(Base):
    __tablename__ = "step_attempts"
    __table_args__ = (UniqueConstraint("attempt_id", "step_id", name="uq_step_attempts_attempt_step"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    attempt_id = Column(Integer, ForeignKey("attempts.id", ondelete="CASCADE"), nullable=False, index=True)
    step_id = Column(Integer, ForeignKey("scenario_steps.id", ondelete="CASCADE"), nullable=False)
    step_order = Column(Integer, nullable=False)  # denormalized for ordering
    chosen_action = Column(String(16), nullable=True)
    is_correct = Column(Boolean, nullable=False)

    attempt = relationship("Attempt", back_populates="step_attempts")
    step = relationship("ScenarioStep", back_populates="step_attempts")
