"""Mint a bearer token for local development (signed with JWT_SECRET).

Usage:
    python -m scripts.mint_dev_token <user_id> [email] [--minutes N]

Prints the token; send it as "Authorization: Bearer <token>".
"""

import argparse
from datetime import timedelta

from task_manager.infrastructure.persistence.database import is_valid_user_id
from task_manager.infrastructure.security.jwt import create_access_token


def main() -> None:
    parser = argparse.ArgumentParser(description="Mint a local development bearer token.")
    parser.add_argument("user_id")
    parser.add_argument("email", nargs="?")
    parser.add_argument("--minutes", type=int, default=None)
    args = parser.parse_args()

    if not is_valid_user_id(args.user_id):
        parser.error("user_id may only contain letters, digits and _.:@|- (max 128)")

    claims = {"sub": args.user_id, "role": "authenticated"}
    if args.email:
        claims["email"] = args.email
    expires = timedelta(minutes=args.minutes) if args.minutes else None
    print(create_access_token(claims, expires_delta=expires))


if __name__ == "__main__":
    main()
