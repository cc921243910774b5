from sqlalchemy.orm import Session

from . import user as model


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user_by_email(db: Session, email: str):
    return db.query(model.User).filter(model.User.email == normalize_email(email)).first()


def get_user_by_id(db: Session, user_id: int):
    return db.query(model.User).filter(model.User.id == user_id).first()


def create_user(db: Session, email: str, hashed_password: str):
    db_user = model.User(email=normalize_email(email), hashed_password=hashed_password)
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user
