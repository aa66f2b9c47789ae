#!/usr/bin/env python3

import argparse
import sys

from sqlmodel import Session, create_engine, select

from accounts.models.schema import PiggyAccount, User
from accounts.shared import Config, load_config

config: Config = load_config()
DATABASE_URL = config.database.url

MODELS = {"users": User, "piggybank": PiggyAccount}


def parse_args():
    parser = argparse.ArgumentParser(
        description="Simulate password hash tampering for an account"
    )
    parser.add_argument("email", type=str, help="Email of the account to modify")
    parser.add_argument(
        "--collection",
        choices=sorted(MODELS),
        default="users",
        help="Which account collection to modify (default: users)",
    )
    parser.add_argument(
        "--db",
        type=str,
        default=DATABASE_URL,
        help=f"Database URL (default: {DATABASE_URL})",
    )
    return parser.parse_args()


def simulate_attack(email: str, model, db_url: str):
    engine = create_engine(db_url)

    with Session(engine) as session:
        statement = select(model).where(model.email == email)
        account = session.exec(statement).one_or_none()

        if not account:
            print(f"[!] Account '{email}' not found in the database.")
            sys.exit(1)

        # Keep the scheme prefix but garble the salt and key
        account.password = "scrypt$16384$8$1$not-base64$!!"
        account.version += 1
        session.add(account)
        session.commit()

        print(f"[✔] Tampered password hash for '{email}'; logins must now fail.")


if __name__ == "__main__":
    args = parse_args()
    simulate_attack(args.email, MODELS[args.collection], args.db)
