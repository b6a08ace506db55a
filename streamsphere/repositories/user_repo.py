from typing import Optional
from sqlmodel import Session, select
from streamsphere.models.user import User, UserRole
from streamsphere.models.common import utcnow

def get_user_by_email(db: Session, email: str) -> Optional[User]:
    stmt = select(User).where(User.email == email.lower())
    return db.exec(stmt).first()

def get_user(db: Session, user_id: str) -> Optional[User]:
    return db.get(User, user_id)

def create_user(
    db: Session, name: str, email: str, hashed_password: str, role: UserRole
) -> User:
    db_user = User(
        name=name,
        email=email.lower(),
        hashed_password=hashed_password,
        role=role,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user

def update_user(db: Session, user: User, **fields) -> User:
    """
    Apply the given column values and bump ``updated_at``.
    """
    for key, value in fields.items():
        setattr(user, key, value)
    user.updated_at = utcnow()
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
