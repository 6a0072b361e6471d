from typing import Optional
from fastapi import APIRouter, HTTPException, Depends, Query, Request, status
from dependency_injector.wiring import inject, Provide

from app.app_containers import ApplicationContainer
from app.core.logger import logger

from app.v1_0.helper.query import InvalidQuery
from app.v1_0.services import StudentService

router = APIRouter(prefix="/students", tags=["Students"])

@router.get(
    "",
    summary="List students",
    description=(
        "Returns all students. Supports OData-style query options: "
        "$select, $filter, $orderby, $skip and $top."
    ),
    status_code=status.HTTP_200_OK,
    responses={400: {"description": "Invalid query option"}},
)
@inject
async def list_students(
    request: Request,
    select: Optional[str] = Query(None, alias="$select", description="Comma separated fields, e.g. id,name"),
    filter_: Optional[str] = Query(None, alias="$filter", description="e.g. year eq 2020 and contains(name,'a')"),
    orderby: Optional[str] = Query(None, alias="$orderby", description="e.g. year desc,name"),
    skip: Optional[str] = Query(None, alias="$skip", description="Number of items to skip"),
    top: Optional[str] = Query(None, alias="$top", description="Maximum number of items"),
    service: StudentService = Depends(
        Provide[ApplicationContainer.api_container.student_service]
    ),
):
    options = {
        "$select": select,
        "$filter": filter_,
        "$orderby": orderby,
        "$skip": skip,
        "$top": top,
    }
    # unsupported $-options ($expand, $count, ...) are passed through so they get rejected
    options.update(
        (k, v) for k, v in request.query_params.items()
        if k.startswith("$") and k not in options
    )
    logger.debug(
        "[StudentRouter] list options=%s",
        {k: v for k, v in options.items() if v is not None},
    )
    try:
        return await service.list_students(options)
    except InvalidQuery as e:
        logger.info("[StudentRouter] invalid query: %s", e)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.to_detail())
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[StudentRouter] list error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to list students")
