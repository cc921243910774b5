import logging
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from ..models.db import application as application_model
from .. import schemas
from .query_builder import ListingQuery, build_listing_statement, build_status_count_statement

logger = logging.getLogger(__name__)


def _record_fields(application: schemas.ApplicationBase) -> dict:
    data = application.model_dump()
    data["status"] = application.status.value
    return data


def get_application_by_id(db: Session, application_id: int, user_id: int):
    # Scoping by owner makes another user's record indistinguishable from a missing one
    return db.query(application_model.Application).filter(
        application_model.Application.id == application_id,
        application_model.Application.user_id == user_id
    ).first()


def list_applications_for_user(db: Session, user_id: int, listing_query: ListingQuery) -> List[application_model.Application]:
    statement = build_listing_statement(user_id, listing_query)
    return list(db.scalars(statement).all())


def count_applications_by_status(db: Session, user_id: int, listing_query: ListingQuery) -> Dict[str, int]:
    counts = {status: 0 for status in schemas.STATUS_VALUES}
    for status, count in db.execute(build_status_count_statement(user_id, listing_query)):
        counts[status] = counts.get(status, 0) + count
    return counts


def create_application_for_user(db: Session, application: schemas.ApplicationCreate, user_id: int):
    db_application = application_model.Application(**_record_fields(application), user_id=user_id)
    db.add(db_application)
    db.commit()
    db.refresh(db_application)
    logger.info("Created application %s for user %s", db_application.id, user_id)
    return db_application


def update_application(db: Session, application_id: int, application_update: schemas.ApplicationUpdate, user_id: int):
    db_application = get_application_by_id(db=db, application_id=application_id, user_id=user_id)
    if db_application:
        # Wholesale replacement: every mutable field is written
        for key, value in _record_fields(application_update).items():
            setattr(db_application, key, value)
        db.commit()
        db.refresh(db_application)
        logger.info("Updated application %s for user %s", application_id, user_id)
    return db_application


def delete_application(db: Session, application_id: int, user_id: int) -> Optional[int]:
    db_application = get_application_by_id(db=db, application_id=application_id, user_id=user_id)
    if db_application is None:
        return None
    db.delete(db_application)
    db.commit()
    logger.info("Deleted application %s for user %s", application_id, user_id)
    return application_id
