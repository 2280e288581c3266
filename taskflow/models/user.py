from sqlalchemy import Column, Integer, String, DateTime, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from taskflow.database import Base
from taskflow.models.enums import Role, enum_values


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    # bcrypt hash; never leaves the credential store
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(Role, values_callable=enum_values, native_enum=False, length=16),
        nullable=False,
        default=Role.USER,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    tasks = relationship("Task", back_populates="owner", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User id={self.id} email={self.email!r} role={self.role}>"
