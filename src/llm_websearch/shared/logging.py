from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler


class LogConfig:
    """Logging setup for the llm-websearch command line."""

    NOISY_LOGGERS = (
        "httpx",
        "httpcore",
        "hpack",
        "tavily",
    )

    @classmethod
    def configure(cls, *, verbose: bool = False, debug: bool = False) -> None:
        """Configure logging based on verbosity flags.

        Args:
            verbose: Enable INFO level logs with Rich rendering.
            debug: Enable DEBUG output (overrides verbose).
        """
        root = logging.getLogger()
        root.handlers.clear()

        # Always silence noisy third-party loggers first
        for logger_name in cls.NOISY_LOGGERS:
            logging.getLogger(logger_name).setLevel(logging.WARNING)

        log_prefix = os.getenv("LLM_WEBSEARCH_LOG_PREFIX", "").strip()
        console_level = logging.INFO if (verbose or debug) else logging.WARNING
        root_level = logging.DEBUG if debug else console_level

        class _PrefixFilter(logging.Filter):
            def filter(self, record: logging.LogRecord) -> bool:
                if not log_prefix:
                    return True
                # Format the message first if there are args, then prepend prefix
                if record.args:
                    record.msg = record.msg % record.args
                    record.args = ()
                record.msg = f"[{log_prefix}] {record.msg}"
                return True

        # Results go to stdout; keep logs on stderr
        console = Console(stderr=True)
        handler = RichHandler(
            console=console,
            show_path=False,
            show_time=debug,
            show_level=debug,
            rich_tracebacks=True,
            markup=False,
        )
        handler.addFilter(_PrefixFilter())
        root.addHandler(handler)
        root.setLevel(root_level)


def configure_logging(*, verbose: bool = False, debug: bool = False) -> None:
    LogConfig.configure(verbose=verbose, debug=debug)
