#!/usr/bin/env python
"""Create (or promote) an admin account.

Usage: python create_admin.py EMAIL PASSWORD [NAME]
"""
import sys

from taskboard.database import create_tables, get_session
from taskboard.models import User, UserRole
from taskboard.routers.auth import get_password_hash


def main(argv):
    if len(argv) < 2:
        print(__doc__.strip())
        return 1
    email, password = argv[0], argv[1]
    name = argv[2] if len(argv) > 2 else "Admin"

    # Create tables if not exist
    create_tables()

    with get_session() as db:
        user = db.query(User).filter(User.email == email).first()
        if user:
            user.role = UserRole.ADMIN
            print(f"Promoted existing user {email} to admin")
        else:
            db.add(User(name=name, email=email, hashed_password=get_password_hash(password), role=UserRole.ADMIN))
            print(f"Admin user created: {email}")
        db.commit()
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
