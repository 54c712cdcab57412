from synergysphere.database.base import Base
from .user import User
from .project import Project, ProjectMember
from .task import Task, TaskAssignee, TaskComment
from .discussion import DiscussionThread, DiscussionMessage
from .notification import Notification
