"""Command-line entry point for dirdesk.

Start-up runs in a few plain stages:

1. Read the command line and refuse to run without an interactive terminal.
2. Load ``~/.dirdesk.toml`` and configure the log file.
3. Check the requested directory and launch the browser.
4. Print where the user ended up, or save a crash report.
"""

from __future__ import annotations

import argparse
import logging
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from dirdesk import DirectoryBrowser, DirectoryBrowserError, __version__
from dirdesk.config import (
    create_default_config,
    get_resize_debounce_ms,
    get_timestamp_format,
    load_config,
)
from dirdesk.logging_config import setup_logging

logger = logging.getLogger("dirdesk.cli")

# Crash dump file location
CRASH_LOG_FILE = Path.home() / "dirdesk.crash.txt"


def validate_directory(path: Path) -> Path:
    """Return ``path`` resolved, or the working directory if it is unusable.

    A typo or a file path should not stop the browser from starting, so a bad
    value only produces a warning on stderr.
    """
    try:
        resolved = path.expanduser().resolve()
        if not resolved.exists():
            print(f"Warning: directory does not exist: {path}", file=sys.stderr)
            print("   Using current directory instead", file=sys.stderr)
            return Path.cwd()
        if not resolved.is_dir():
            print(f"Warning: path is not a directory: {path}", file=sys.stderr)
            print("   Using current directory instead", file=sys.stderr)
            return Path.cwd()
        return resolved
    except (OSError, RuntimeError) as e:
        print(f"Warning: Cannot access directory: {path}", file=sys.stderr)
        print(f"   Error: {e}", file=sys.stderr)
        print("   Using current directory instead", file=sys.stderr)
        return Path.cwd()


def write_crash_log(exception: BaseException) -> None:
    """Append a crash report with the full traceback to :data:`CRASH_LOG_FILE`."""
    try:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        crash_info = f"""
================================================================================
dirdesk Crash Report
================================================================================
Timestamp: {timestamp}
Version: {__version__}
Python: {sys.version}
Platform: {sys.platform}

Exception Type: {type(exception).__name__}
Exception Message: {str(exception)}

Traceback:
{"".join(traceback.format_exception(type(exception), exception, exception.__traceback__))}
================================================================================
"""
        with open(CRASH_LOG_FILE, "a") as f:
            f.write(crash_info)

        print("\ndirdesk crashed unexpectedly!", file=sys.stderr)
        print(f"   Crash details saved to: {CRASH_LOG_FILE}", file=sys.stderr)
        print("   Please report this issue with the crash log.", file=sys.stderr)
    except OSError:
        print("\ndirdesk crashed and could not write crash log!", file=sys.stderr)
        traceback.print_exception(type(exception), exception, exception.__traceback__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse ``argv``: an optional start directory plus ``--version``."""
    parser = argparse.ArgumentParser(
        prog="dirdesk",
        description="Browse a directory with a contextual action menu in the terminal.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Show version number and exit.",
    )
    parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to open (default: current directory).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the browser and return the process exit code."""
    try:
        args = parse_args(argv)

        # curses needs a real terminal on stdout
        if not sys.stdout.isatty():
            print("The directory browser requires an interactive terminal.")
            return 1

        config = load_config()
        setup_logging(config)
        create_default_config()

        start_dir = validate_directory(Path(args.directory))
        logger.info("Starting in %s", start_dir)
        browser = DirectoryBrowser(
            start_dir,
            timestamp_format=get_timestamp_format(config),
            resize_debounce_ms=get_resize_debounce_ms(config),
        )

        final_dir = browser.browse()
        logger.info("Exited in %s", final_dir)
        print(f"Final directory: {final_dir}")
        return 0

    except DirectoryBrowserError as err:
        logger.error("Could not start browser: %s", err)
        print(f"Could not start browser: {err}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        # Ctrl+C is a normal way out
        return 0
    except Exception as e:
        logger.critical("Unexpected error", exc_info=True)
        write_crash_log(e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
