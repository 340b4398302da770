"""Create the DynamoDB tables simsurvey needs (skips ones that already exist).

Point SIMSURVEY_DYNAMODB_ENDPOINT_URL at DynamoDB Local to provision a dev database.
"""
from __future__ import annotations

import sys
from pathlib import Path

# Add backend root to path
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from simsurvey.config import settings  # noqa: E402
from simsurvey.db import create_tables  # noqa: E402


def main() -> None:
    target = settings.dynamodb_endpoint_url or f"AWS ({settings.aws_region})"
    print(f"Provisioning tables on {target}...")
    created = create_tables()
    if created:
        print("Created:", ", ".join(created))
    else:
        print("All tables already exist.")


if __name__ == "__main__":
    main()
