"""
Create an admin account, or promote an existing account to admin.

Admin accounts cannot be created through the API.
Run: python -m scripts.create_admin --name "Site Admin" --email admin@example.com --password '...'
"""
import argparse
import logging
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from jobportal.db.session import SessionLocal
from jobportal.db.models.user import User
from jobportal.core.security import check_password_strength, hash_password

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_admin(db, name: str, email: str, password: str, promote: bool = False):
    """
    Return the admin user for ``email``, creating it if needed.

    An existing non-admin account is only promoted when ``promote`` is set;
    otherwise None is returned and nothing changes.
    """
    email = email.strip().lower()
    user = db.query(User).filter(User.email == email).first()

    if user:
        if user.role == "admin":
            logger.info(f"User {email} is already an admin (ID: {user.id})")
            return user
        if not promote:
            logger.error(f"User {email} already exists with role {user.role}; pass --promote to make it admin")
            return None
        user.role = "admin"
        db.commit()
        db.refresh(user)
        logger.info(f"Promoted user {email} (ID: {user.id}) to admin")
        return user

    weakness = check_password_strength(password)
    if weakness:
        raise ValueError(weakness)

    user = User(
        name=name,
        email=email,
        password_hash=hash_password(password),
        role="admin",
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Created admin user {email} with ID: {user.id}")
    return user


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create or promote a Job Portal admin")
    parser.add_argument("--name", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--promote", action="store_true", help="Promote an existing account")
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        user = create_admin(db, args.name, args.email, args.password, promote=args.promote)
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating admin: {e}", exc_info=True)
        return 1
    finally:
        db.close()

    if user is None:
        print(f"\n[ERROR] Admin not created for {args.email}")
        return 1
    print(f"\n[SUCCESS] {args.email} is an admin")
    return 0


if __name__ == "__main__":
    sys.exit(main())
