"""Seed an administrator user."""

import os

from app import create_app
from models import db
from models.user import Role, User

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@example.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "AdminPass123")
ADMIN_FULL_NAME = os.getenv("ADMIN_FULL_NAME", "Administrator")


def seed_admin(email: str, password: str, full_name: str) -> str:
    """Create or promote the admin account; returns "created" or "updated".

    Must run inside an app context.
    """
    email = email.strip().lower()
    admin = User.query.filter(db.func.lower(User.email) == email).first()
    if admin is None:
        admin = User(email=email, full_name=full_name, role=Role.ADMIN)
        admin.set_password(password)
        db.session.add(admin)
        action = "created"
    else:
        admin.role = Role.ADMIN
        admin.set_password(password)
        action = "updated"
    db.session.commit()
    return action


def main() -> None:
    app = create_app()
    with app.app_context():
        db.create_all()
        action = seed_admin(ADMIN_EMAIL, ADMIN_PASSWORD, ADMIN_FULL_NAME)
        print(f"Admin user {action}: {ADMIN_EMAIL.strip().lower()}")


if __name__ == "__main__":
    main()
