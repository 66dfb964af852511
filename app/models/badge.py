"""Badge model: the achievement for completing a level (one per level)."""
from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship

from app.db.session import Base


class Badge(Base):
    __tablename__ = "badges"

    id = Column(Integer, primary_key=True, autoincrement=True)
    level_id = Column(Integer, ForeignKey("levels.id"), unique=True, nullable=False, index=True)
    name = Column(String(128), nullable=False)
    description = Column(Text, nullable=True)
    icon_url = Column(String(512), nullable=True)

    level = relationship("Level", back_populates="badge")
    awards = relationship("UserBadge", back_populates="badge", cascade="all, delete-orphan")
