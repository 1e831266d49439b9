# Scripts/create_user.py
# Usage (from backend/):
#   python -m Scripts.create_user alice alice@example.com
#   python -m Scripts.create_user admin admin@example.com --admin
#
# Creates the user if missing (or updates its role) and prints a bearer token.

import argparse

from app.core.roles import ROLE_ADMIN, ROLE_USER
from app.core.security import create_access_token
from app.db.init_db import init_db
from app.db.session import SessionLocal
from app.models.user import User


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("username")
    ap.add_argument("email")
    ap.add_argument("--admin", action="store_true", help="Give the user the admin role")
    args = ap.parse_args()

    init_db()
    db = SessionLocal()
    try:
        role = ROLE_ADMIN if args.admin else ROLE_USER
        u = db.query(User).filter_by(username=args.username.strip()).first()
        if u is None:
            u = User(username=args.username.strip(), email=args.email.lower().strip(), role=role)
            db.add(u)
            print(f"Created user {args.username} ({role})")
        else:
            u.role = role
            print(f"User {args.username} already exists, role set to {role}")
        db.commit()
        db.refresh(u)

        token = create_access_token({"sub": str(u.user_id)})
        print(f"user_id={u.user_id}")
        print(f"Bearer {token}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
