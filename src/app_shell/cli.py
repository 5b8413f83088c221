import argparse
import getpass
import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass

from src.adapters.clock import SystemClock
from src.adapters.sqlite.gateway import SQLitePostGateway
from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.repos import SQLiteAuthorRepo
from src.api.auth_utils import get_password_hash
from src.api.deps import Settings
from src.app_shell.config import validate_ops_rules
from src.components.posts import PostRepository
from src.domain.entities import Author
from src.domain.errors import ConflictError
from src.rules.loader import lifecycle_config, load_rules
from src.services.publish import PublishDueJob

logger = logging.getLogger("cli")


@dataclass
class CliContext:
    settings: Settings
    gateway: SQLitePostGateway
    repository: PostRepository
    authors: SQLiteAuthorRepo
    clock: SystemClock


def get_context(settings: Settings) -> CliContext:
    if not settings.rules_path.exists():
        logger.error("Rules file %s not found.", settings.rules_path)
        sys.exit(1)

    rules = load_rules(settings.rules_path)
    validate_ops_rules(rules, settings.data_dir)

    clock = SystemClock()
    gateway = SQLitePostGateway(settings.db_path, clock)
    return CliContext(
        settings=settings,
        gateway=gateway,
        repository=PostRepository(gateway, clock, lifecycle_config(rules)),
        authors=SQLiteAuthorRepo(settings.db_path),
        clock=clock,
    )


def handle_migrate(ctx: CliContext, args: argparse.Namespace) -> None:
    migrator = SQLiteMigrator(ctx.settings.db_path, str(ctx.settings.migrations_dir))
    applied = migrator.run_migrations()
    print(f"Applied {len(applied)} migrations.")


def handle_create_author(ctx: CliContext, args: argparse.Namespace) -> None:
    password = args.password or getpass.getpass("Password: ")
    if not password:
        logger.error("A password is required.")
        sys.exit(1)

    author = Author(
        email=args.email,
        display_name=args.display_name,
        password_hash=get_password_hash(password),
        created_at=ctx.clock.now_utc(),
    )
    try:
        ctx.authors.save(author)
    except ConflictError as e:
        logger.error("%s", e)
        sys.exit(1)
    print(f"Author created: {author.id} <{author.email}>")


def handle_publish(ctx: CliContext, args: argparse.Namespace) -> None:
    count = PublishDueJob(ctx.gateway, ctx.repository, ctx.clock).run()
    print(f"Published {count} posts.")


def main(argv: Sequence[str] | None = None) -> None:
    logging.basicConfig(level=logging.INFO)

    parser = argparse.ArgumentParser(description="Blog CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # migrate
    subparsers.add_parser("migrate", help="Apply pending database migrations")

    # create-author
    author_parser = subparsers.add_parser("create-author", help="Create an author account")
    author_parser.add_argument("email", help="Login email")
    author_parser.add_argument("--display-name", help="Name shown on posts")
    author_parser.add_argument("--password", help="Password (prompted when omitted)")

    # publish_due
    subparsers.add_parser("publish_due", help="Publish scheduled posts that are due")

    args = parser.parse_args(argv)

    ctx = get_context(Settings())

    if args.command == "migrate":
        handle_migrate(ctx, args)
    elif args.command == "create-author":
        handle_create_author(ctx, args)
    elif args.command == "publish_due":
        handle_publish(ctx, args)


if __name__ == "__main__":
    main()
