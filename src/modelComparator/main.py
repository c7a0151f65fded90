#!/usr/bin/env python3
"""
modelComparator - tune and compare classifier families on one dataset.

Two commands are supported:
- run: tune every model family under shared cross-validation, refit the
  selected candidates and score them on a held-out test partition
- report: print a previously exported comparison
"""

import sys
import warnings
from datetime import datetime
from typing import Optional, Sequence

from sklearn.exceptions import ConvergenceWarning

from .cli.argument_parser import parse_arguments
from .core.exceptions import ModelComparatorError
from .utils.logger import get_logger

warnings.filterwarnings("ignore", category=ConvergenceWarning)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point: dispatch to the command handler and map errors to exit codes."""
    args = parse_arguments(argv)
    logger = get_logger("main")

    handlers = {
        'run': lambda a: __import__('modelComparator.pipelines.run', fromlist=['handle_run']).handle_run(a),
        'report': lambda a: __import__('modelComparator.pipelines.report', fromlist=['handle_report']).handle_report(a),
    }

    cmd = getattr(args, 'command', None)
    handler = handlers.get(cmd)
    if handler is None:
        raise ValueError(f"Unknown command: {cmd}. Supported commands: {', '.join(handlers.keys())}")

    start_time = datetime.now()
    logger.info(f"Command: {cmd.upper()} | started {start_time.strftime('%Y-%m-%d %H:%M:%S')}")
    try:
        status = handler(args)
    except KeyboardInterrupt:
        logger.error(f"{cmd.upper()} interrupted by user")
        return 130
    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 2
    except ModelComparatorError as e:
        logger.error(f"{cmd.upper()} failed: {type(e).__name__}: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Invalid argument: {e}")
        return 3

    logger.info(f"{cmd.upper()} finished in {datetime.now() - start_time} | exit status {status}")
    return status


if __name__ == "__main__":
    sys.exit(main())
