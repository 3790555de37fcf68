"""Command-line entry point: `llm-websearch "query"`."""

import argparse
import asyncio
import json
import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .search import SearchDepth, SearchError, SearchProvider, SearchResults, format_results_for_llm, get_registry, search
from .shared.logging import configure_logging
from .utils.config import get_settings

console = Console()
err_console = Console(stderr=True)


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Search the web with the configured provider (DuckDuckGo if no API key is set)"
    )
    parser.add_argument("query", nargs="+", help="Search text")
    parser.add_argument(
        "-n", "--max-results",
        type=int,
        default=settings.SEARCH_MAX_RESULTS,
        help=f"Maximum results to return (Default: {settings.SEARCH_MAX_RESULTS})",
    )
    parser.add_argument(
        "-p", "--provider",
        type=str,
        choices=[p.value for p in SearchProvider],
        default=None,
        help="Force a provider instead of auto-selection",
    )
    parser.add_argument(
        "--depth",
        choices=[d.value for d in SearchDepth],
        default=SearchDepth.BASIC.value,
        help="Search depth for providers that support it",
    )
    parser.add_argument("--include-domain", action="append", default=[], metavar="HOST", help="Restrict results to HOST (repeatable)")
    parser.add_argument("--exclude-domain", action="append", default=[], metavar="HOST", help="Drop results from HOST (repeatable)")

    output = parser.add_mutually_exclusive_group()
    output.add_argument("--json", action="store_true", help="Print results as JSON")
    output.add_argument("--plain", action="store_true", help="Print the LLM-formatted text block")

    parser.add_argument("--which", action="store_true", help="Explain which provider would be used and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    parser.add_argument("--debug", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def render_results(results: SearchResults) -> None:
    """Print results as a Rich table."""
    if not results.results:
        console.print("[yellow]No results found.[/yellow]")
        return

    table = Table(title=f"Results for: {escape(results.query)}", show_lines=True, border_style="grey39")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Result", overflow="fold")
    for i, result in enumerate(results.results, 1):
        body = f"[bold]{escape(result.title)}[/bold]\n[cyan]{escape(result.url)}[/cyan]"
        if result.content:
            body += f"\n{escape(result.content)}"
        table.add_row(str(i), body)
    console.print(table)
    if results.images:
        console.print(f"[dim]{len(results.images)} images[/dim]")


def main(argv: list[str] | None = None) -> int:
    args = parse_arguments(argv)
    configure_logging(verbose=args.verbose, debug=args.debug)

    if args.which:
        console.print(get_registry().describe_selection(args.provider))
        return 0

    try:
        results = asyncio.run(
            search(
                " ".join(args.query),
                max_results=args.max_results,
                search_depth=args.depth,
                include_domains=args.include_domain,
                exclude_domains=args.exclude_domain,
                provider=args.provider,
            )
        )
    except (SearchError, ValueError) as e:
        err_console.print(f"[bold red]Search failed:[/bold red] {escape(str(e))}")
        return 1

    if args.json:
        print(json.dumps(results.to_dict(), indent=2, ensure_ascii=False))
    elif args.plain:
        print(format_results_for_llm(results))
    else:
        render_results(results)
    return 0


if __name__ == "__main__":
    sys.exit(main())
