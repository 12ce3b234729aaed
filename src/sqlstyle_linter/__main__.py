"""Entry point for SQL Style Linter CLI."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from sqlstyle_linter.cli import build_parser
from sqlstyle_linter.cli.commands.check import INTERRUPTED_EXIT_CODE
from sqlstyle_linter.common import UserInputError
from sqlstyle_linter.observability import setup_logging

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    setup_logging(Path(args.log_config) if args.log_config else None, verbose=args.verbose)

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return int(handler(args))
    except UserInputError as exc:
        logger.error("%s", exc)
        return 1
    except OSError as exc:
        logger.error("filesystem error: %s", exc)
        return 1
    except KeyboardInterrupt:
        logger.warning("interrupted")
        return INTERRUPTED_EXIT_CODE
    except Exception as exc:  # pragma: no cover
        logger.error("lint run failed: %s", exc)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
