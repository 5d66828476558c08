"""Robotech storefront management CLI.

Schema management, sample data and the rating backfill for all domains.

Usage:
    python src/manage.py setup-db           # Create all tables
    python src/manage.py drop-db            # Drop all tables
    python src/manage.py seed               # Wipe and load sample data
    python src/manage.py recompute-ratings  # Rebuild every product's rating
"""

import argparse
import sys

DOMAIN_NAMES = ["catalogue", "contact"]


def _domains(names=None):
    from catalogue.domain import catalogue
    from contact.domain import contact

    all_domains = {"catalogue": catalogue, "contact": contact}
    targets = {n: all_domains[n] for n in names} if names else all_domains

    for domain in targets.values():
        domain.init()
    return targets


def setup_databases(domains=None):
    """Create database schemas for the specified (or all) domains."""
    from shared.db import setup_db

    for name, domain in _domains(domains).items():
        print(f"Creating {name} database schema...")
        setup_db(domain)
        print(f"  {name} schema ready.")

    print("Done.")


def drop_databases(domains=None):
    """Drop database schemas for the specified (or all) domains."""
    from shared.db import drop_db

    for name, domain in _domains(domains).items():
        print(f"Dropping {name} database schema...")
        drop_db(domain)
        print(f"  {name} schema dropped.")

    print("Done.")


def seed_databases():
    """Wipe every domain and load the sample data set."""
    from catalogue.utils.seed import seed_catalogue
    from contact.utils.seed import seed_contact

    from shared.db import reset_data

    domains = _domains()

    for name, domain in domains.items():
        print(f"Clearing {name} data...")
        reset_data(domain)

    with domains["catalogue"].domain_context():
        summary = seed_catalogue()
    with domains["contact"].domain_context():
        summary["messages"] = seed_contact()

    print("Seeded:")
    for kind, count in summary.items():
        print(f"  {kind}: {count}")


def recompute_ratings():
    """Backfill every product's rating aggregate from its approved reviews."""
    from catalogue.utils.seed import recompute_all_ratings

    domains = _domains(["catalogue"])
    with domains["catalogue"].domain_context():
        count = recompute_all_ratings()

    print(f"Recomputed ratings for {count} products.")


def main():
    parser = argparse.ArgumentParser(description="Robotech storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    setup_parser = subparsers.add_parser("setup-db", help="Create all database tables")
    setup_parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        nargs="*",
        help="Specific domain(s) to set up (default: all)",
    )

    drop_parser = subparsers.add_parser("drop-db", help="Drop all database tables")
    drop_parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        nargs="*",
        help="Specific domain(s) to drop (default: all)",
    )

    subparsers.add_parser("seed", help="Wipe all data and load sample records")
    subparsers.add_parser("recompute-ratings", help="Rebuild rating and review count for every product")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases(args.domain)
    elif args.command == "drop-db":
        drop_databases(args.domain)
    elif args.command == "seed":
        seed_databases()
    elif args.command == "recompute-ratings":
        recompute_ratings()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
