"""CLI application entry point and command routing for yt-shaper.

This module is the **sole error boundary** for the entire application.
It catches :class:`~yt_shaper.exceptions.YtShaperError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — every command awaits one service
  operation and renders its envelope.
* ``print()`` is forbidden outside the CLI layer; the console proxies
  are used exclusively.
* An envelope with ``err=True`` maps to :data:`exit_codes.GENERAL_ERROR`.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable
from typing import Any

from yt_shaper.cli import exit_codes
from yt_shaper.cli.console import console, output
from yt_shaper.config import Settings
from yt_shaper.core.models import Envelope
from yt_shaper.core.options import ALL_TYPES, DOWNLOAD_TYPES, DownloadLinksOptions, GetInfoOptions
from yt_shaper.exceptions import YtShaperError
from yt_shaper.helper import YouTubeHelper
from yt_shaper.utils.logging import configure_logging
from yt_shaper.version import __version__

Command = Callable[[YouTubeHelper, argparse.Namespace], Awaitable[tuple[Envelope[Any], str]]]


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _add_filter_args(parser: argparse.ArgumentParser, default_types: tuple[str, ...]) -> None:
    parser.add_argument(
        "-t",
        "--type",
        dest="types",
        action="append",
        choices=ALL_TYPES,
        default=None,
        help=f"Format type to keep; repeatable (default: {', '.join(default_types)}).",
    )
    parser.add_argument(
        "-q",
        "--quality",
        dest="qualities",
        action="append",
        default=None,
        metavar="LABEL",
        help="Quality label to keep, e.g. 720p; repeatable (default: any).",
    )


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser."""
    parser = argparse.ArgumentParser(
        prog="yt-shaper",
        description="Shaped YouTube video, playlist and search metadata.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    info = commands.add_parser("info", help="Filtered formats of one video.")
    info.add_argument("url")
    info.add_argument("-n", "--number", type=int, default=1, help="Ordinal embedded in URLs.")
    info.add_argument("--text", action="store_true", help="Render the text layout.")
    _add_filter_args(info, ALL_TYPES)

    link = commands.add_parser("link", help="First matching download link of one video.")
    link.add_argument("url")
    link.add_argument("-n", "--number", type=int, default=1, help="Ordinal embedded in the URL.")
    _add_filter_args(link, DOWNLOAD_TYPES)

    links = commands.add_parser("links", help="One download link per video URL.")
    links.add_argument("urls", nargs="+")
    _add_filter_args(links, DOWNLOAD_TYPES)

    count = commands.add_parser("playlist-count", help="Number of videos in a playlist.")
    count.add_argument("url")

    playlist_info = commands.add_parser("playlist-info", help="Entries of a playlist.")
    playlist_info.add_argument("url")
    playlist_info.add_argument(
        "--with-links",
        action="store_true",
        help="Also fetch the formats of every entry.",
    )

    playlist_links = commands.add_parser("playlist-links", help="Download links for a playlist range.")
    playlist_links.add_argument("url")
    playlist_links.add_argument("--from", dest="start", type=int, default=None)
    playlist_links.add_argument("--to", dest="end", type=int, default=None)
    playlist_links.add_argument("--text", action="store_true", help="One link per line.")
    playlist_links.add_argument(
        "-j",
        "--concurrency",
        type=int,
        default=None,
        help="Entries resolved at once (default: sequential).",
    )
    _add_filter_args(playlist_links, DOWNLOAD_TYPES)

    search = commands.add_parser("search", help="Search videos or playlists.")
    search.add_argument("kind", choices=("video", "playlist"))
    search.add_argument("query")
    search.add_argument("--raw", action="store_true", help="Print the unshaped provider entries.")

    related = commands.add_parser(
        "related",
        help="A video and its recommendations (empty with the yt-dlp backend).",
    )
    related.add_argument("url")

    return parser


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def _qualities(args: argparse.Namespace) -> dict[str, bool]:
    return {label: True for label in args.qualities or ()}


async def _info(helper: YouTubeHelper, args: argparse.Namespace) -> tuple[Envelope[Any], str]:
    options = GetInfoOptions(
        video_number=args.number,
        video_data_type="text" if args.text else "json",
        types=tuple(args.types or ALL_TYPES),
        qualitys=_qualities(args),
    )
    return await helper.video.get_info(args.url, options), "VideoData"


async def _link(helper: YouTubeHelper, args: argparse.Namespace) -> tuple[Envelope[Any], str]:
    result = await helper.video.get_download_link(
        args.url, args.number, tuple(args.types or DOWNLOAD_TYPES), _qualities(args),
    )
    return result, "results"


async def _links(helper: YouTubeHelper, args: argparse.Namespace) -> tuple[Envelope[Any], str]:
    result = await helper.video.get_download_link_for_many(
        args.urls, tuple(args.types or DOWNLOAD_TYPES), _qualities(args),
    )
    return result, "results"


async def _playlist_count(helper: YouTubeHelper, args: argparse.Namespace) -> tuple[Envelope[Any], str]:
    return await helper.playlist.number_video(args.url), "numberVideo"


async def _playlist_info(helper: YouTubeHelper, args: argparse.Namespace) -> tuple[Envelope[Any], str]:
    return await helper.playlist.get_info(args.url, args.with_links), "PlaylistData"


async def _playlist_links(helper: YouTubeHelper, args: argparse.Namespace) -> tuple[Envelope[Any], str]:
    options = DownloadLinksOptions(
        video_data_type="text" if args.text else "json",
        types=tuple(args.types or DOWNLOAD_TYPES),
        qualitys=_qualities(args),
        start=args.start,
        end=args.end,
        concurrency=args.concurrency,
    )
    return await helper.playlist.get_downloads_links(args.url, options), "results"


async def _search(helper: YouTubeHelper, args: argparse.Namespace) -> tuple[Envelope[Any], str]:
    if args.raw:
        return await helper.search.raw_search(args.kind, args.query), "results"
    return await helper.search.search(args.kind, args.query), "results"


async def _related(helper: YouTubeHelper, args: argparse.Namespace) -> tuple[Envelope[Any], str]:
    return await helper.search.video_and_recommendations(args.url), "results"


_COMMANDS: dict[str, Command] = {
    "info": _info,
    "link": _link,
    "links": _links,
    "playlist-count": _playlist_count,
    "playlist-info": _playlist_info,
    "playlist-links": _playlist_links,
    "search": _search,
    "related": _related,
}


def _render(result: Envelope[Any], key: str) -> int:
    """Print the envelope payload and map it to an exit code."""
    if result.err:
        console.print_error(result.err_msg)
        return exit_codes.GENERAL_ERROR

    if isinstance(result.data, str):
        output.print_text(result.data)
    else:
        output.print_json(result.to_dict(key))
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None, *, helper: YouTubeHelper | None = None) -> int:
    """Run the yt-shaper CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.
    helper:
        Pre-wired services; defaults to the yt-dlp backed helper.
        Accepting it enables deterministic testing without network.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    settings = Settings.from_env()
    configure_logging(logging.DEBUG if args.verbose else settings.log_level)

    helper = helper or YouTubeHelper.default(settings)
    result, key = asyncio.run(_COMMANDS[args.command](helper, args))
    return _render(result, key)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except YtShaperError as exc:
        console.print_error(str(exc))
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
