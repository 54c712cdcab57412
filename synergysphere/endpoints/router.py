from fastapi import APIRouter

from synergysphere.endpoints.v1 import (
    assignees_api, auth_api, comments_api, me_api, members_api, messages_api,
    notifications_api, projects_api, tasks_api, threads_api, users_api,
)

api_router = APIRouter()

api_router.include_router(auth_api.router)
api_router.include_router(users_api.router)
api_router.include_router(projects_api.router)
api_router.include_router(members_api.router)
api_router.include_router(tasks_api.router)
api_router.include_router(assignees_api.router)
api_router.include_router(comments_api.router)
api_router.include_router(threads_api.router)
api_router.include_router(messages_api.router)
api_router.include_router(notifications_api.router)
api_router.include_router(me_api.router)
