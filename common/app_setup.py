"""
Logging and console output for the projinfo command line.

Functions:
    setup_logging      - Route the root logger to a logfile or syslog.
    monkeypatch_print  - Make built-in print render rich markup.
    print_and_log      - Print a line and log it at info level.
    print_error        - Print a line to stderr and log it at error level.
"""

import builtins
import logging
import logging.handlers
import os
import sys
from typing import Optional

from rich import print as rich_print

LOGFILE_ENV = "PROJINFO_LOGFILE"

_print_logger: Optional[logging.Logger] = None


def setup_logging(app_name: str = "projinfo", host_log: bool = False, loglevel: int = logging.INFO,
                  logfile: Optional[str] = None) -> logging.Logger:
    """
    Configure the root logger with a single handler.
    host_log=True sends records to syslog, where the host collects them.
    Otherwise records go to logfile, $PROJINFO_LOGFILE or ~/.<app_name>/log.txt, first one set wins.
    """
    global _print_logger
    logger = logging.getLogger()
    logger.setLevel(loglevel)
    if host_log:
        formatter = logging.Formatter(f'%(asctime)s %(levelname)s %(process)d [{app_name}] %(message)s')
        try:
            handler: logging.Handler = logging.handlers.SysLogHandler(address='/dev/log')
        except OSError as e:
            print(f"Failed to set up SysLogHandler: {e}", file=sys.stderr)
            handler = logging.StreamHandler()
    else:
        formatter = logging.Formatter('%(asctime)s %(levelname)s %(threadName)s %(name)s %(message)s')
        logfile = logfile or os.environ.get(LOGFILE_ENV)
        if logfile is None:
            log_dir = os.path.expanduser(f"~/.{app_name}")
            os.makedirs(log_dir, exist_ok=True)
            logfile = os.path.join(log_dir, "log.txt")
        handler = logging.FileHandler(logfile)

    for h in logger.handlers[:]:
        logger.removeHandler(h)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    _print_logger = logger
    logger.debug(f"Logger initialized for {app_name}")
    return logger


def monkeypatch_print():
    """Replace built-in print with rich.print (no logging)."""
    builtins.print = rich_print


def print_and_log(message: str, **kwargs):
    print(message, **kwargs)
    if _print_logger is not None:
        _print_logger.info(message)


def print_error(message: str, **kwargs):
    print(f'[bold red]{message}[/bold red]', file=sys.stderr, **kwargs)
    if _print_logger is not None:
        _print_logger.error(message)
