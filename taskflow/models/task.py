from sqlalchemy import Column, Integer, String, ForeignKey, Text, Date, DateTime, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from taskflow.database import Base
from taskflow.models.enums import Priority, TaskStatus, enum_values


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    priority = Column(
        Enum(Priority, values_callable=enum_values, native_enum=False, length=16),
        nullable=False,
        default=Priority.MEDIUM,
    )
    status = Column(
        Enum(TaskStatus, values_callable=enum_values, native_enum=False, length=16),
        nullable=False,
        default=TaskStatus.PENDING,
    )
    due_date = Column(Date, nullable=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    owner = relationship("User", back_populates="tasks")

    @property
    def user_name(self):
        return self.owner.name if self.owner is not None else None
