"""CLI for a scheduled publication run."""

from __future__ import annotations

import argparse
import logging
import os
import sys

from dotenv import load_dotenv

from article_store.connection import create_tables, get_session
from article_store.repository import get_or_create_category
from common.cli_helpers import parse_csv_list, save_jsonl_local, setup_logging
from common.config import get_config
from common.datetime import utc_now
from publish_articles.errors import AuthorizationError
from publish_articles.models import Credentials, PublishRequest
from publish_articles.publish_articles import publish_articles

load_dotenv()

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--categories",
        default="World",
        help="Comma-separated category names; the first one drives the feed topic.",
    )
    parser.add_argument("--count", type=int, default=1)
    parser.add_argument("--language", default="en")
    parser.add_argument("--rss-only", action="store_true")
    parser.add_argument("--create-tables", action="store_true")
    parser.add_argument("--load-local", action="store_true")
    args = parser.parse_args(argv)

    setup_logging()
    config = get_config()

    if not 1 <= args.count <= config.publish.max_count:
        parser.error(f"--count must be between 1 and {config.publish.max_count}")

    names = parse_csv_list(args.categories) or ["World"]
    credentials = Credentials(cron_secret=os.environ.get("CRON_SECRET"))

    if args.create_tables:
        create_tables()

    with get_session() as session:
        category_ids = [get_or_create_category(session, name) for name in names]
        request = PublishRequest(
            category_ids=category_ids,
            category_names=names,
            count=args.count,
            language=args.language,
            rss_only=args.rss_only,
        )
        try:
            result = publish_articles(request, credentials, session, config)
        except AuthorizationError as e:
            logger.error("Not authorized (%d): %s", e.status_code, e.message)
            return 1

    logger.info("%s [mode=%s, demoted=%d]", result.message, result.mode.value, result.demoted)

    if args.load_local and result.articles:
        filepath = save_jsonl_local(result.articles, "published_articles", utc_now())
        logger.info("Saved %d published articles to %s", result.created, filepath)

    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
