"""Demonstration runner: print the first two pages of the configured collection."""

import asyncio
import logging
from typing import Optional

import typer

from .config import Settings, get_settings
from .errors import PagerError
from .pagination import Pager
from .store import DocumentStore, connect_store
from .store.monitoring import format_document


logger = logging.getLogger(__name__)

app = typer.Typer(help="Fetch two consecutive pages from a MongoDB collection and log the commands sent.")


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=getattr(logging, settings.log_level), format=settings.log_format)


async def show_pages(pager: Pager, limit: Optional[int] = None, after_id: Optional[str] = None) -> None:
    """Log the page after ``after_id`` and, if it is non-empty, the page after that."""
    first_page = await pager.paginate(after_id, limit)
    logger.info(f"First page:\n{format_document(first_page)}")

    if first_page:
        second_page = await pager.paginate(pager.next_after(first_page), limit)
        logger.info(f"Second page:\n{format_document(second_page)}")


async def run_demo(
    settings: Settings,
    limit: Optional[int] = None,
    after_id: Optional[str] = None
) -> int:
    """Connect, show two pages, disconnect. Returns the process exit code."""
    store: Optional[DocumentStore] = None
    try:
        store = await connect_store(settings)
        pager = Pager.from_settings(store, settings)
        await show_pages(pager, limit, after_id)
        return 0
    except PagerError as e:
        logger.error(f"Pagination failed: {e}")
        return 1
    finally:
        if store is not None:
            await store.close()


@app.command()
def main(
    limit: Optional[int] = typer.Option(None, "--limit", help="Page size (defaults to DEFAULT_PAGE_SIZE)"),
    after_id: Optional[str] = typer.Option(
        None, "--after-id", help="Start after this identifier instead of the beginning"
    ),
) -> None:
    settings = get_settings()
    configure_logging(settings)
    exit_code = asyncio.run(run_demo(settings, limit, after_id))
    if exit_code:
        raise typer.Exit(code=exit_code)


if __name__ == "__main__":
    app()
