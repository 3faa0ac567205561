"""
Script to mint a bearer token for calling the API by hand.

Tokens are signed with SECRET_KEY from the environment / .env, so they are
accepted by any server running with the same settings.

Run this script from the project root:
    python create_token.py alice
    python create_token.py admin --admin --minutes 30
"""

import argparse
import os
import sys
from datetime import timedelta

# Add project root to Python path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from jobly.core.config import settings
from jobly.core.security import create_access_token


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create a Jobly API bearer token")
    parser.add_argument("username", help="value of the username claim")
    parser.add_argument("--admin", action="store_true", help="set the isAdmin claim")
    parser.add_argument(
        "--minutes",
        type=int,
        default=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        help="token lifetime in minutes",
    )
    args = parser.parse_args(argv)

    token = create_access_token(
        args.username,
        is_admin=args.admin,
        expires_delta=timedelta(minutes=args.minutes),
    )

    role = "admin" if args.admin else "user"
    print(f"# {role} token for {args.username}, valid {args.minutes} minutes", file=sys.stderr)
    print(token)
    return 0


if __name__ == "__main__":
    sys.exit(main())
