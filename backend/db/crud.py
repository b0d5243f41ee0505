"""
Database CRUD operations for user accounts.
"""
import numpy as np
from typing import Optional, Sequence
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from db.models import User


class UserAlreadyExists(Exception):
    """Raised when the unique email constraint rejects a new account."""


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Get a user by email."""
    return db.query(User).filter_by(email=email).first()


def create_user(db: Session, name: str, age: float, email: str, role: str,
                descriptor: Sequence[float]) -> User:
    """Create a user holding exactly one face descriptor."""
    arr = np.asarray(descriptor, dtype=np.float32)
    user = User(
        name=name,
        age=age,
        email=email,
        role=role,
        face_descriptors=[arr.tolist()],
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise UserAlreadyExists(email) from e
    db.refresh(user)
    return user


def get_user_descriptors(user: User) -> np.ndarray:
    """Stored descriptors as an (N, D) float32 matrix."""
    if not user.face_descriptors:
        return np.empty((0, 0), dtype=np.float32)
    return np.asarray(user.face_descriptors, dtype=np.float32)
