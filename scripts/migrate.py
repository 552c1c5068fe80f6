"""
Apply, verify or reset the form tables outside of API startup.

    python scripts/migrate.py              # apply pending migrations
    python scripts/migrate.py --verify     # check columns only
    python scripts/migrate.py --reset --yes
"""

import argparse
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1] / "src" / "backend"
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

from lunaris_api.config import settings
from lunaris_api.db.postgres import PostgresStore
from lunaris_api.db.schema import apply_migrations, reset_schema, verify_schema
from lunaris_api.utils.logger import configure_logging, get_logger

logger = get_logger("lunaris_api.migrate")


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--verify", action="store_true", help="only verify the schema")
    mode.add_argument(
        "--reset",
        action="store_true",
        help="drop and recreate the form tables (destroys stored submissions)",
    )
    parser.add_argument("--yes", action="store_true", help="confirm a destructive --reset")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = _parse_args(argv)
    configure_logging(settings.log_level)

    if args.reset and not args.yes:
        logger.error("--reset drops every stored submission; rerun with --yes to confirm.")
        return 1

    store = PostgresStore.from_settings(settings)
    try:
        if args.reset:
            reset_schema(store)
        elif not args.verify:
            apply_migrations(store)
        verify_schema(store)
    except Exception:
        logger.exception("Schema migration failed")
        return 1
    finally:
        store.close()
    print("Schema is ready.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
