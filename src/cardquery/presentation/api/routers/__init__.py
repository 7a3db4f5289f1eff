from cardquery.presentation.api.routers.admin import router as admin_router
from cardquery.presentation.api.routers.feedback import router as feedback_router
from cardquery.presentation.api.routers.search import router as search_router

__all__ = [
    "admin_router",
    "feedback_router",
    "search_router",
]
