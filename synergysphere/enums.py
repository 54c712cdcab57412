from enum import Enum

class ProjectStatus(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"
    ARCHIVED = "archived"

class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    BLOCKED = "blocked"

class ProjectRole(str, Enum):
    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"
    VIEWER = "viewer"

    @property
    def rank(self) -> int:
        return _ROLE_RANK[self]

    def satisfies(self, required: "ProjectRole") -> bool:
        return self.rank >= required.rank

_ROLE_RANK = {
    ProjectRole.VIEWER: 1,
    ProjectRole.MEMBER: 2,
    ProjectRole.ADMIN: 3,
    ProjectRole.OWNER: 4,
}

class NotificationType(str, Enum):
    TASK_ASSIGNED = "task_assigned"
    PROJECT_MEMBER_ADDED = "project_member_added"
    TASK_COMMENT = "task_comment"
    THREAD_MESSAGE = "thread_message"

class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

class ErrorCode(str, Enum):
    # Generic
    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"

    # Auth / User
    USER_NOT_FOUND = "USER_NOT_FOUND"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    EMAIL_EXISTS = "EMAIL_EXISTS"

    # Project / Domain
    PROJECT_NOT_FOUND = "PROJECT_NOT_FOUND"
    MEMBER_NOT_FOUND = "MEMBER_NOT_FOUND"
    TASK_NOT_FOUND = "TASK_NOT_FOUND"
    ASSIGNEE_NOT_FOUND = "ASSIGNEE_NOT_FOUND"
    COMMENT_NOT_FOUND = "COMMENT_NOT_FOUND"
    THREAD_NOT_FOUND = "THREAD_NOT_FOUND"
    MESSAGE_NOT_FOUND = "MESSAGE_NOT_FOUND"
    NOTIFICATION_NOT_FOUND = "NOTIFICATION_NOT_FOUND"

    # Business rules
    NOT_PROJECT_MEMBER = "NOT_PROJECT_MEMBER"
