import enum


class Role(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


class Priority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


def enum_values(enum_cls):
    # store the wire value ("in-progress"), not the member name
    return [member.value for member in enum_cls]
