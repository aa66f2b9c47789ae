#!/usr/bin/env python3

import argparse

from accounts.core import PasswordHasher
from accounts.models.schema import PiggyAccount, User
from accounts.services import PiggyService, UserService
from accounts.shared import Config, load_config
from accounts.shared.db import create_db_engine, init_db
from accounts.shared.http import ApiError
from accounts.shared.store import RecordStore

config: Config = load_config()


def parse_args():
    parser = argparse.ArgumentParser(
        description="Create numbered demo accounts, e.g. user1@example.com"
    )
    parser.add_argument("count", type=int, help="How many accounts to create")
    parser.add_argument(
        "--piggybank",
        action="store_true",
        help="Seed piggybank accounts instead of users",
    )
    parser.add_argument(
        "--password",
        type=str,
        default="password123",
        help="Password given to every seeded account",
    )
    parser.add_argument(
        "--domain", type=str, default="example.com", help="Email domain"
    )
    return parser.parse_args()


def seed(count: int, piggybank: bool, password: str, domain: str):
    engine = create_db_engine(config)
    init_db(engine)
    hasher = PasswordHasher(
        n=config.security.n,
        r=config.security.r,
        p=config.security.p,
        salt_length=config.security.salt_length,
    )

    if piggybank:
        service = PiggyService(RecordStore(engine, PiggyAccount), hasher)
    else:
        service = UserService(RecordStore(engine, User), hasher)

    created = 0
    for number in range(1, count + 1):
        email = f"{'piggy' if piggybank else 'user'}{number}@{domain}"
        extra = {"balance": 0, "ktp": f"{number:016d}"} if piggybank else {}
        try:
            service.create(f"Account {number}", email, password, password, **extra)
        except ApiError as e:
            print(f"[!] Skipped {email}: {e.detail}")
            continue
        created += 1

    print(f"[✔] Created {created} of {count} accounts.")


if __name__ == "__main__":
    args = parse_args()
    seed(args.count, args.piggybank, args.password, args.domain)
