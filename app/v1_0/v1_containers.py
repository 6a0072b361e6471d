from dependency_injector import containers, providers

from app.core.settings import settings
from app.v1_0.helper.query import QueryPolicy, QueryShaper, STUDENT_SCHEMA
from app.v1_0.repositories import StudentRepository
from app.v1_0.services import StudentService

class APIContainer(containers.DeclarativeContainer):
    student_repository = providers.Singleton(StudentRepository)

    query_policy = providers.Singleton(
        QueryPolicy,
        allowed_options = frozenset(settings.QUERY_ALLOWED_OPTIONS_LIST),
        allowed_functions = frozenset(settings.QUERY_ALLOWED_FUNCTIONS_LIST),
        max_top = settings.QUERY_MAX_TOP
    )
    query_shaper = providers.Singleton(
        QueryShaper,
        schema = STUDENT_SCHEMA,
        policy = query_policy
    )
    student_service = providers.Factory(
        StudentService,
        student_repository = student_repository,
        query_shaper = query_shaper
    )
