"""User business logic."""
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from poker.db.models import User


def get_user(db: Session, user_id: str) -> Optional[User]:
    """Get a user by id."""
    return db.query(User).filter(User.id == user_id).first()


def upsert_user(db: Session, user_id: str, email: str, name: str) -> User:
    """
    Create a user or replace its name and email.

    There is no ownership check: whoever presents an id may rename it.
    """
    user = get_user(db, user_id)
    if user is None:
        user = User(id=user_id, email=email, name=name)
        db.add(user)
    else:
        user.email = email
        user.name = name

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(user)

    return user
