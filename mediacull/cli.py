"""Command line entry point: review requests and delete the chosen ones."""

import argparse
import asyncio
import logging
from typing import Optional, Sequence

import httpx
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.prompt import Prompt

from mediacull.config import Settings, load_settings
from mediacull.errors import InvalidSortingOption, MediaCullError, WatchHistoryError
from mediacull.models import SORTING_CODES, MediaItem, SortingOption, format_size
from mediacull.progress import DeletionProgress
from mediacull.services import Backends, DeletionOrchestrator, HistoryReducer, MediaEnricher, sort_items
from mediacull.version import __version__

logger = logging.getLogger(__name__)
console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mediacull",
        description="Review Overseerr requests with their watch history and delete what is no longer needed."
    )
    parser.add_argument(
        "-s", "--sort",
        default=None,
        help="sorting option: " + ", ".join(SORTING_CODES)
    )
    parser.add_argument("--env-file", default=None, help="read settings from this env file")
    parser.add_argument("--test-connections", action="store_true", help="check every configured backend and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def setup_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)]
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


def parse_selection(text: str, count: int, limit: int = 5) -> list[int]:
    """Turn '1, 3' into zero-based indices [0, 2].
    
    Blank input selects nothing. Raises ValueError for anything that is not
    a list of distinct item numbers within range and limit.
    """
    text = text.strip()
    if not text:
        return []
    
    indices = []
    for part in text.replace(" ", ",").split(","):
        if not part:
            continue
        if not part.isdigit():
            raise ValueError(f"'{part}' is not an item number")
        number = int(part)
        if not 1 <= number <= count:
            raise ValueError(f"{number} is not between 1 and {count}")
        if number - 1 not in indices:
            indices.append(number - 1)
    
    if len(indices) > limit:
        raise ValueError(f"At most {limit} items can be chosen")
    return indices


def choose_sorting(code: Optional[str]) -> SortingOption:
    """Parse the sorting code, asking again until a valid one is given."""
    if code is None:
        return SortingOption()
    while True:
        try:
            return SortingOption.from_code(code.strip())
        except InvalidSortingOption as e:
            console.print(f"[red]{e}[/red]")
            code = Prompt.ask("Sort by", choices=list(SORTING_CODES), default="n", console=console)


def show_items(items: Sequence[MediaItem]):
    for number, item in enumerate(items, start=1):
        console.print(f"[bold]{number:>3}.[/bold] ", end="")
        console.print(item.describe(), markup=False, highlight=False)


def choose_items(items: Sequence[MediaItem], limit: int) -> list[int]:
    while True:
        answer = Prompt.ask(
            f"Choose what media to delete (up to {limit} numbers, comma separated, blank for none)",
            default="",
            show_default=False,
            console=console
        )
        try:
            return parse_selection(answer, len(items), limit)
        except ValueError as e:
            console.print(f"[red]{e}[/red]")


def deletion_summary(progress: DeletionProgress) -> str:
    return (
        f"Deleted {progress.processed_count} items, "
        f"reclaimed {format_size(progress.bytes_reclaimed)} "
        f"in {progress.elapsed_seconds():.1f}s."
    )


async def test_connections(backends: Backends) -> bool:
    all_ok = True
    for name, client in backends.configured():
        try:
            await client.test_connection()
            console.print(f"[green]OK[/green]     {name}")
        except (httpx.HTTPError, MediaCullError) as e:
            all_ok = False
            console.print(f"[red]FAILED[/red] {name}: {e}")
    return all_ok


async def run(settings: Settings, sorting: SortingOption) -> int:
    backends = Backends.from_settings(settings)
    enricher = MediaEnricher(backends, reducer=HistoryReducer(backends.tautulli, settings.history_page_size))
    
    with console.status("Fetching requests..."):
        requests = await backends.overseerr.get_requests(
            filter=settings.request_filter,
            page_size=settings.request_page_size
        )
        logger.info(f"Found {len(requests)} requests")
        items = sort_items(await enricher.enrich_all(requests), sorting)
    
    if not items:
        console.print("No media to review. Exiting...")
        return 0
    
    console.clear()
    show_items(items)
    chosen = choose_items(items, settings.max_selections)
    
    if not chosen:
        console.print("No items selected. Exiting...")
        return 0
    
    console.clear()
    orchestrator = DeletionOrchestrator(backends, console=console)
    deleted = await orchestrator.confirm_and_delete(items, chosen)
    if deleted:
        console.print(deletion_summary(orchestrator.progress))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    
    try:
        settings = load_settings(args.env_file)
    except ValidationError as e:
        console.print(f"[red]Error reading config:[/red] {e}")
        return 1
    
    try:
        if args.test_connections:
            ok = asyncio.run(test_connections(Backends.from_settings(settings)))
            return 0 if ok else 1
        sorting = choose_sorting(args.sort or settings.default_sort)
        return asyncio.run(run(settings, sorting))
    except WatchHistoryError as e:
        logger.error(f"Bad watch history for rating key {e.rating_key}: {e}")
        return 1
    except (MediaCullError, httpx.HTTPError, ValidationError) as e:
        logger.error(f"Aborting: {e}")
        return 1
    except KeyboardInterrupt:
        console.print("Interrupted.")
        return 130
