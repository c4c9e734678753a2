# stockpile_api/models/stockpile.py
from sqlalchemy import CheckConstraint, Column, DateTime, Float, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from stockpile_api.database import Base


# A tracked pile of material with its dimensions and position
class Stockpile(Base):
    __tablename__ = "stockpiles"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    material = Column(String, nullable=False)
    grade = Column(String, nullable=False)

    # Dimensions are controlled by constraints
    length = Column(Float, CheckConstraint("length >= 0"), nullable=False)
    width = Column(Float, CheckConstraint("width >= 0"), nullable=False)
    height = Column(Float, CheckConstraint("height >= 0"), nullable=False)
    volume = Column(Float, CheckConstraint("volume >= 0"), nullable=False)

    # Geographic point
    longitude = Column(Float, nullable=False)
    latitude = Column(Float, nullable=False)

    # User accountable for the pile
    responsible_team_id = Column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    responsible_team = relationship("User")
