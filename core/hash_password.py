"""ADMIN_HASHED_PASSWORD 값을 만드는 CLI."""
import argparse
import sys

from core.auth_utils import hash_password


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Print a bcrypt hash for ADMIN_HASHED_PASSWORD")
    parser.add_argument("password", help="admin password to hash")
    args = parser.parse_args(argv)

    if not args.password:
        print("Please provide a non-empty password.", file=sys.stderr)
        return 1

    print(f"Hashed password: {hash_password(args.password)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
