from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from .. import schemas
from ..services import application_tracker as application_service
from ..services.query_builder import ListingQuery
from ..models.db.database import get_db
from ..utils.api_helpers import check_resource_exists
from .auth import get_current_active_user

router = APIRouter()


def listing_query_params(
    statuses: Optional[List[str]] = Query(None, alias="status"),
    q: Optional[str] = None,
    sort: Optional[str] = None,
    sort_by: Optional[str] = Query(None, alias="sortBy"),
) -> ListingQuery:
    """Normalize the listing filters; malformed values fall back to defaults."""
    return ListingQuery.from_params(statuses=statuses, q=q, sort_by=sort_by, sort_direction=sort)


@router.post("", response_model=schemas.Application, status_code=status.HTTP_201_CREATED)
def create_application(
    application: schemas.ApplicationCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_active_user)
):
    """
    Create a new job application entry for the current user.
    """
    return application_service.create_application_for_user(
        db=db, application=application, user_id=current_user.id
    )

@router.get("", response_model=List[schemas.Application])
def read_applications(
    listing_query: ListingQuery = Depends(listing_query_params),
    db: Session = Depends(get_db),
    current_user=Depends(get_current_active_user)
):
    """
    List the current user's applications, filtered by status and search text
    and ordered by the requested base sort.
    """
    return application_service.list_applications_for_user(
        db, user_id=current_user.id, listing_query=listing_query
    )

@router.get("/summary", response_model=schemas.StatusSummary)
def read_status_summary(
    listing_query: ListingQuery = Depends(listing_query_params),
    db: Session = Depends(get_db),
    current_user=Depends(get_current_active_user)
):
    """
    Count the current user's filtered applications per status.
    """
    counts = application_service.count_applications_by_status(
        db, user_id=current_user.id, listing_query=listing_query
    )
    return {"counts": counts, "total": sum(counts.values())}

@router.get("/{application_id}", response_model=schemas.Application)
def read_application(
    application_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_active_user)
):
    db_application = application_service.get_application_by_id(
        db, application_id=application_id, user_id=current_user.id
    )
    check_resource_exists(db_application, "Application")
    return db_application

@router.put("/{application_id}", response_model=schemas.Application)
def update_application(
    application_id: int,
    application: schemas.ApplicationUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_active_user)
):
    """
    Replace a job application's details.
    """
    db_application = application_service.update_application(
        db, application_id=application_id, application_update=application, user_id=current_user.id
    )
    check_resource_exists(db_application, "Application")
    return db_application

@router.delete("/{application_id}", response_model=schemas.OkResponse)
def delete_application(
    application_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_active_user)
):
    deleted_id = application_service.delete_application(
        db, application_id=application_id, user_id=current_user.id
    )
    check_resource_exists(deleted_id, "Application")
    return {"ok": True}
