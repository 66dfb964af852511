"""ScenarioStep model: one multiple-choice question; options stored as JSON text."""
import json

from sqlalchemy import Column, Integer, String, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.session import Base


class ScenarioStep(Base):
    __tablename__ = "scenario_steps"
    __table_args__ = (UniqueConstraint("scenario_id", "step_order", name="uq_scenario_steps_order"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    scenario_id = Column(Integer, ForeignKey("scenarios.id", ondelete="CASCADE"), nullable=False, index=True)
    step_order = Column(Integer, nullable=False)
    prompt = Column(Text, nullable=False)
    # SQLite has no native JSON; options are {"A": "...", "B": "...", ...} as a string
    options_json = Column(Text, nullable=False, default="{}")
    correct_action = Column(String(1), nullable=False)  # A | B | C | D
    feedback = Column(Text, nullable=True)

    scenario = relationship("Scenario", back_populates="steps")
    step_attempts = relationship("StepAttempt", back_populates="step", cascade="all, delete-orphan")

    @property
    def options(self) -> dict[str, str]:
        return json.loads(self.options_json or "{}")
