import re

# Auth Constants
BCRYPT_MAX_BYTES = 72

# Pagination
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100

UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}",
    re.IGNORECASE,
)

class ErrorMessages:
    PROJECT_NOT_FOUND = "Project not found"
    TASK_NOT_FOUND = "Task not found"
    USER_NOT_FOUND = "User not found"
    MEMBER_NOT_FOUND = "Member not found"
    NOT_A_MEMBER = "Not a member"
    ASSIGNEE_NOT_FOUND = "Assignee not found"
    COMMENT_NOT_FOUND = "Comment not found"
    THREAD_NOT_FOUND = "Thread not found"
    MESSAGE_NOT_FOUND = "Message not found"
    NOTIFICATION_NOT_FOUND = "Notification not found"

    # Auth
    UNAUTHORIZED = "Unauthorized"
    INVALID_CREDENTIALS = "Invalid credentials"
    EMAIL_EXISTS = "Email already in use"
    INVALID_CURRENT_PASSWORD = "Current password incorrect"

    # Permissions
    ACCESS_DENIED = "Not allowed"
    ONLY_CREATOR_GRANTS_OWNER = "Only the project creator can grant the owner role"

    # Validation
    NO_FIELDS_TO_UPDATE = "No valid fields to update"
    ASSIGNEE_IDS_REQUIRED = "userId or userIds required"
    NO_VALID_UUIDS = "No valid UUIDs provided"
    NO_PROJECT_MEMBERS = "None of the provided users are members of this project"
    PARENT_COMMENT_NOT_FOUND = "parent_comment_id not found for this task"
    PARENT_MESSAGE_NOT_FOUND = "parent_message_id not found for this thread"

    INTERNAL_ERROR = "Internal server error"
    DUPLICATE_RECORD = "Record already exists"
    INVALID_REFERENCE = "Referenced record does not exist"
    DATABASE_UNAVAILABLE = "Database unavailable"

class SuccessMessages:
    PASSWORD_UPDATED = "Password updated successfully"
