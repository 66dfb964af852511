"""Scenario model: one training exercise inside a level, made of ordered steps."""
from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship

from app.db.session import Base


class Scenario(Base):
    __tablename__ = "scenarios"

    id = Column(Integer, primary_key=True, autoincrement=True)
    level_id = Column(Integer, ForeignKey("levels.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    media_url = Column(String(512), nullable=True)

    level = relationship("Level", back_populates="scenarios")
    steps = relationship(
        "ScenarioStep",
        back_populates="scenario",
        cascade="all, delete-orphan",
        order_by="ScenarioStep.step_order",
    )
    attempts = relationship("Attempt", back_populates="scenario", cascade="all, delete-orphan")
