"""
Create the database tables and, optionally, promote a user to admin.

    python init_db.py                      # create missing tables
    python init_db.py --reset              # drop and recreate (dev only)
    python init_db.py --make-admin alice   # grant admin to an existing user
"""
import argparse
import asyncio
import logging

from folio.app.core.logging import configure_logging
from folio.app.db import init_models
from folio.app.db.base import AsyncSessionLocal, engine
from folio.app.services import users as user_service

logger = logging.getLogger("init_db")


async def make_admin(username: str) -> bool:
    async with AsyncSessionLocal() as db:
        user = await user_service.find_user_by_username(db, username)
        if user is None:
            logger.error("No user named %s", username)
            return False
        await user_service.set_admin(db, user)
    logger.info("%s is now an administrator", username)
    return True


async def main(args: argparse.Namespace) -> int:
    await init_models(engine, drop=args.reset)
    ok = True
    if args.make_admin:
        ok = await make_admin(args.make_admin)
    await engine.dispose()
    return 0 if ok else 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--reset", action="store_true", help="drop all tables first")
    parser.add_argument("--make-admin", metavar="USERNAME", help="grant admin rights to USERNAME")
    configure_logging()
    raise SystemExit(asyncio.run(main(parser.parse_args())))
