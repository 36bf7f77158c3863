#!/usr/bin/env python3
"""Print the comment section of a content item, with Logfire error tracking.

Usage:
    scripts/browse_comments.py 42
    scripts/browse_comments.py 42 --search "climate" --pages 2
    scripts/browse_comments.py 42 --thread 1337
"""

import argparse
import asyncio
import sys

import logfire

from commentary.application.viewmodel import CommentsViewModel, CommentsViewModelFactory
from commentary.config import Settings
from commentary.domain.model import Comment, SearchResult
from commentary.domain.value import CommentSort, ContentType, ObjectId, TargetRef
from commentary.util.di.container import create_container
from commentary.util.logging import setup_logging
from commentary.util.observability import configure_logfire, instrument_httpx


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("object_id", type=int)
    parser.add_argument(
        "--content-type", choices=[c.value for c in ContentType], default=ContentType.POLL.value
    )
    parser.add_argument(
        "--sort", choices=[s.value for s in CommentSort], default=CommentSort.NEWEST.value
    )
    parser.add_argument("--search", help="Show search results instead of all comments")
    parser.add_argument("--thread", type=int, help="Show the thread of one comment")
    parser.add_argument("--pages", type=int, default=1, help="Pages to load")
    return parser.parse_args(argv)


def render(view_model: CommentsViewModel) -> None:
    for ancestor in view_model.get_thread_context():
        print(f"^ #{ancestor.id} @{ancestor.author_info.username}: {ancestor.content}")

    # (item, indent) pairs in display order
    stack = [(item, 0) for item in reversed(view_model.get_visible_items())]
    while stack:
        item, indent = stack.pop()
        pad = "  " * indent
        if isinstance(item, SearchResult):
            print(f"{pad}#{item.id} @{item.author_info.username}: {item.display_text}")
            continue

        text = "[deleted]" if item.is_deleted else item.content
        print(f"{pad}#{item.id} @{item.author_info.username}: {text}")
        if view_model.is_collapsed(item.id):
            print(f"{pad}  {view_model.collapsed_label(item)}")
            continue
        children: list[Comment] = item.children
        stack.extend((child, indent + 1) for child in reversed(children))
        if item.has_more_replies:
            print(f"{pad}  (more replies in thread #{item.id})")

    state = view_model.empty_state()
    if state is not None:
        print(f"({state.value.replace('_', ' ')})")

    pagination = view_model.get_pagination()
    print(f"-- {pagination.current_count}/{pagination.total} shown, more: {pagination.has_more}")


async def browse(args: argparse.Namespace) -> int:
    container = create_container()
    try:
        async with container() as request_container:
            factory = await request_container.get(CommentsViewModelFactory)
            view_model = factory.open(
                TargetRef(content_type=ContentType(args.content_type), object_id=ObjectId(args.object_id))
            )
            view_model.change_sort(CommentSort(args.sort))
            if args.thread is not None:
                view_model.show_thread(args.thread)
            elif args.search:
                view_model.show_search(args.search)

            result = await view_model.load()
            if result.failed:
                print("Failed to load comments", file=sys.stderr)
                return 1
            for _ in range(args.pages - 1):
                more = await view_model.on_sentinel_visible()
                if more.page is None or more.failed:
                    break

            render(view_model)
            return 0
    finally:
        await container.close()


def main() -> int:
    """Browse a comment section and log any errors to Logfire."""
    args = parse_args(sys.argv[1:])
    settings = Settings()

    # Configure Logfire early to catch startup errors
    configure_logfire(settings)
    setup_logging(settings)
    instrument_httpx()

    try:
        return asyncio.run(browse(args))
    except Exception as e:
        logfire.error(
            "Browsing comments failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
