"""Level model: a group of scenarios. Level ids double as their unlock order."""
from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship

from app.db.session import Base


class Level(Base):
    __tablename__ = "levels"

    id = Column(Integer, primary_key=True, autoincrement=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    scenarios = relationship("Scenario", back_populates="level", cascade="all, delete-orphan")
    badge = relationship("Badge", back_populates="level", uselist=False, cascade="all, delete-orphan")
    user_levels = relationship("UserLevel", back_populates="level", cascade="all, delete-orphan")
