#!/usr/bin/env python3
"""
Script to create a new user interactively.

Usage:
    python scripts/create_user.py

    # Or with email as argument:
    python scripts/create_user.py jane@example.com --name "Jane Doe"

    # List existing users:
    python scripts/create_user.py --list
"""

import argparse
import getpass
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from taskdesk.config import load_config
from taskdesk.auth import UserStore, PasswordHandler, normalize_email
from taskdesk.errors import DuplicateEmailError
from taskdesk.services.user_auth_service import NAME_MIN_LENGTH, PASSWORD_MIN_LENGTH


def main():
    parser = argparse.ArgumentParser(description="Create a new user")
    parser.add_argument("email", nargs="?", help="Email address (e.g., jane@example.com)")
    parser.add_argument("--name", "-n", help="User's name")
    parser.add_argument("--list", "-l", action="store_true", help="List existing users and exit")
    args = parser.parse_args()

    config = load_config()
    store = UserStore(
        file_path=config.storage.users_file,
        password_handler=PasswordHandler(rounds=config.auth.bcrypt_rounds)
    )

    if args.list:
        users = store.list_users()
        if not users:
            print("No users found.")
            return
        for user in sorted(users, key=lambda u: u.created_at):
            print(f"   {user.email:<40} {user.name:<25} {user.user_id}")
        print(f"\n{len(users)} user(s)")
        return

    # Get email
    email = args.email
    if not email:
        email = input("Email (e.g., jane@example.com): ").strip()

    normalized = normalize_email(email)
    if not normalized:
        print(f"❌ Invalid email: {email}")
        sys.exit(1)

    # Check if user already exists
    existing = store.get_by_email(normalized)
    if existing:
        print(f"❌ User with email {normalized} already exists!")
        print(f"   User ID: {existing.user_id}")
        sys.exit(1)

    # Get name
    name = args.name
    if not name:
        name = input("Name: ").strip()

    if len(name or "") < NAME_MIN_LENGTH:
        print(f"❌ Name must be at least {NAME_MIN_LENGTH} characters!")
        sys.exit(1)

    # Get password
    password = getpass.getpass("Enter password: ")
    confirm = getpass.getpass("Confirm password: ")

    if password != confirm:
        print("❌ Passwords do not match!")
        sys.exit(1)

    if len(password) < PASSWORD_MIN_LENGTH:
        print(f"❌ Password must be at least {PASSWORD_MIN_LENGTH} characters!")
        sys.exit(1)

    # Create user
    try:
        user = store.create_user(name=name, email=normalized, password=password)
    except (DuplicateEmailError, ValueError) as e:
        print(f"❌ Failed to create user: {e}")
        sys.exit(1)

    print()
    print("✅ User created successfully!")
    print(f"   Email: {user.email}")
    print(f"   Name: {user.name}")
    print(f"   User ID: {user.user_id}")


if __name__ == "__main__":
    main()
