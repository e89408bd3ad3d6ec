"""User registration — command and handler.

Passwords arrive already hashed; hashing and token issuance belong to the
authentication service in front of this domain.
"""

import structlog
from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from ordering.account.user import User
from ordering.domain import ordering
from ordering.exceptions import Conflict

logger = structlog.get_logger(__name__)


@ordering.command(part_of="User")
class RegisterUser:
    first_name = String(required=True, max_length=100)
    last_name = String(required=True, max_length=100)
    email = String(required=True, max_length=254)
    password_hash = String(max_length=255)


@ordering.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)

        existing = repo._dao.query.filter(email=command.email).all()
        if existing.items:
            raise Conflict({"email": ["User already exists"]})

        user = User.register(
            first_name=command.first_name,
            last_name=command.last_name,
            email=command.email,
            password_hash=command.password_hash,
        )
        repo.add(user)

        logger.info("User registered", user_id=str(user.id))
        return str(user.id)
