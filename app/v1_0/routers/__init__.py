from .students_router import router as students_router
defined_routers = [
    students_router,
    ]
