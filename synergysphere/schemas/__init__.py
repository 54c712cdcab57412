from .auth_schema import RegisterRequest, LoginRequest, ChangePasswordRequest
from .user_schema import UserResponse, UserUpdate
from .project_schema import (
    ProjectCreate, ProjectUpdate, ProjectResponse,
    MemberCreate, MemberUpdate, MemberResponse,
)
from .task_schema import (
    TaskCreate, TaskUpdate, TaskResponse, AssigneeCreate,
    CommentCreate, CommentUpdate, CommentResponse,
)
from .discussion_schema import (
    ThreadCreate, ThreadUpdate, ThreadResponse,
    MessageCreate, MessageUpdate, MessageResponse,
)
from .notification_schema import NotificationResponse, ReadAllRequest, NotificationCount
