# stockpile_api/models/users.py
import enum

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String, func

from stockpile_api.database import Base


# Roles known to the system, lowest privilege last
class Role(str, enum.Enum):
    ADMIN = "admin"
    SUPERVISOR = "supervisor"
    WORKER = "worker"


# Represents a user account with authentication details and system role
class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('admin', 'supervisor', 'worker')", name="ck_users_role"),
    )

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=False, index=True)
    # Hashed, never returned to clients
    password = Column(String, nullable=False)
    name = Column(String, nullable=False)
    role = Column(String, nullable=False, default=Role.WORKER.value)
    last_login = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
