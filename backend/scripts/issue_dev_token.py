"""
Prints a bearer token for local testing against the task API.

    python scripts/issue_dev_token.py <user_id>
"""
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parent.parent))

from app.core.security import create_access_token


def main() -> int:
    if len(sys.argv) != 2:
        print(__doc__.strip())
        return 1
    print(create_access_token(sys.argv[1]))
    return 0


if __name__ == "__main__":
    sys.exit(main())
