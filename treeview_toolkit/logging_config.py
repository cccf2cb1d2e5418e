from __future__ import annotations

"""Central logging configuration for TreeView Toolkit.

Import and call :func:`setup_logging` at application start-up.
"""

import copy
import logging
import logging.config
import os

from treeview_toolkit.config import ConfigManager

__all__ = ["setup_logging"]

_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(console: bool = True) -> None:
    """Configure logging from the ``logging.yml`` configuration.

    Parameters
    ----------
    console : bool, default=True
        Keep the console handler. The terminal front-end passes False
        because curses owns the screen; records then only go to the file.
    """
    log_dir = os.environ.get("TREEVIEW_LOG_DIR", "logs")
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, "app.log")

    try:
        logging_config = copy.deepcopy(ConfigManager().get_logging_config())

        if logging_config and isinstance(logging_config, dict) and logging_config.get("version"):
            handlers = logging_config.get("handlers", {})
            if "file" in handlers:
                handlers["file"]["filename"] = log_file
            if not console:
                _drop_handler(logging_config, "console")

            logging.config.dictConfig(logging_config)
            logging.getLogger(__name__).info("===== Logging initialised from config files =====")
        else:
            _setup_minimal_logging(log_file, console)
    except (ValueError, TypeError, AttributeError, ImportError, OSError) as exc:
        _setup_minimal_logging(log_file, console)
        logging.getLogger(__name__).error("Error loading logging config: %s", exc)

    _apply_debug_overrides()


def _drop_handler(logging_config: dict, name: str) -> None:
    """Remove handler ``name`` and every reference to it."""
    logging_config.get("handlers", {}).pop(name, None)
    targets = list(logging_config.get("loggers", {}).values())
    if "root" in logging_config:
        targets.append(logging_config["root"])
    for target in targets:
        if isinstance(target, dict) and name in target.get("handlers", []):
            target["handlers"] = [h for h in target["handlers"] if h != name]


def _setup_minimal_logging(log_file: str, console: bool) -> None:
    """Set up minimal logging when the configuration is unusable."""
    handlers = {
        'file': {
            'class': 'logging.FileHandler',
            'formatter': 'simple',
            'level': 'DEBUG',
            'filename': log_file,
            'encoding': 'utf-8',
        },
    }
    if console:
        handlers['console'] = {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
            'level': 'INFO',
        }
    minimal_config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'simple': {'format': _FORMAT},
        },
        'handlers': handlers,
        'root': {
            'level': 'INFO',
            'handlers': list(handlers),
        },
    }
    logging.config.dictConfig(minimal_config)


def _apply_debug_overrides() -> None:
    """Apply environment-driven module-specific debug overrides.

    Supports:
    - TREEVIEW_DEBUG=true -> DEBUG for the whole package
    - TREEVIEW_DEBUG_MODULES=comma,separated,logger,names -> DEBUG for listed loggers
    """
    debug_all = os.environ.get('TREEVIEW_DEBUG', '').strip().lower() in {'1', 'true', 'yes', 'on'}
    extra_modules = os.environ.get('TREEVIEW_DEBUG_MODULES', '').strip()
    targets = []
    if debug_all:
        targets.append('treeview_toolkit')
    if extra_modules:
        targets.extend([m.strip() for m in extra_modules.split(',') if m.strip()])

    for name in targets:
        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG)
        logger.info("Debug override active for logger '%s'", name)
