# motri/scripts/create_director.py
"""
Legt einen Director-Account an (einmalig, ausserhalb der API).

    motri-create-director --username alice --email alice@example.org
"""
from __future__ import annotations

import argparse
import getpass
import logging
import sys
from typing import Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError

from motri.core.config import Settings
from motri.core.password_policy import validate_password
from motri.core.errors import WeakPassword
from motri.core.security import PasswordHasher
from motri.db.database import Database
from motri.repositories.director_repo import create_director

log = logging.getLogger(__name__)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a director account")
    parser.add_argument("--username", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", help="wird abgefragt, wenn nicht angegeben")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None, settings: Optional[Settings] = None) -> int:
    args = _parse_args(argv)
    settings = settings or Settings()
    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format="%(levelname)s %(message)s")

    password = args.password or getpass.getpass("Password: ")
    try:
        validate_password(password, settings.PASSWORD_MIN_LENGTH)
    except WeakPassword as ex:
        log.error("%s", ex.message)
        return 1

    try:
        hasher = PasswordHasher.from_settings(settings)
    except ValueError as ex:
        log.error("%s", ex)
        return 1

    database = Database(settings.DB_URL)
    try:
        database.create_all()
        db = database.session()
        try:
            director = create_director(
                db,
                username=args.username,
                email=args.email,
                password=password,
                hasher=hasher,
            )
        finally:
            db.close()
    except ValueError as ex:
        # USERNAME_EXISTS / EMAIL_EXISTS
        log.info("Director already exists (%s)", ex)
        return 0
    except SQLAlchemyError:
        log.exception("Error creating director")
        return 1
    finally:
        database.dispose()

    log.info("Director created successfully! id=%s username=%s", director.id, director.username)
    return 0


if __name__ == "__main__":
    sys.exit(main())
