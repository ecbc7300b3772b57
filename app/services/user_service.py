"""
User service: lifecycle operations for the User kind.

Users carry no foreign references, so the only store-side rejections are
the NOT NULL / not-blank checks on ``name`` and ``password``.
"""
from app.models import User
from app.schemas import UserCreate
from app.services.lifecycle import EntityService


class UserService(EntityService[User]):
    model = User
    kind = "User"


def user_from_payload(data: UserCreate) -> User:
    """Build a transient User candidate from a request payload."""
    return User(
        name=data.name,
        password=data.password,
        email=str(data.email),
        phone=data.phone,
    )
