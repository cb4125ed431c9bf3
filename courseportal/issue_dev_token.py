"""Print a signed bearer token for local development.

Usage:
    python -m courseportal.issue_dev_token student@example.com
"""
import sys

from courseportal.auth.jwt_handler import create_access_token


def main(argv: list[str] | None = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    if not args or not args[0].strip():
        print("Usage: python -m courseportal.issue_dev_token <email>", file=sys.stderr)
        sys.exit(1)
    print(create_access_token(subject=args[0].strip().lower()))


if __name__ == "__main__":
    main()
