"""
Generation logs, tagged and located.

Each record may carry a `tag` (SKIP, MODEL, SCOPE, ...) and the `model` and
`scope` it concerns. Pipeline code attaches them instead of formatting them
into the message:

    log = for_model(logger, "Customer", scope="orders")
    log.warning("missing its target class")
    # -> [WARN] Customer.orders: missing its target class

Records stay structured, so tests and other handlers can filter on
`record.model` / `record.scope` / `record.tag`.
"""

import logging
import sys

ROOT_LOGGER = "lbsdk.gen"


def get_logger(module_name: str = None) -> logging.Logger:
    """`lbsdk.gen.<module>` for a module `__name__`, the root logger for None."""
    if not module_name or module_name == ROOT_LOGGER:
        return logging.getLogger(ROOT_LOGGER)
    return logging.getLogger(ROOT_LOGGER + "." + module_name.rsplit(".", 1)[-1])


class ModelLogAdapter(logging.LoggerAdapter):
    """Binds the model (and scope) being processed to every record."""

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **(kwargs.get("extra") or {})}
        return msg, kwargs


def for_model(logger, model_name: str, scope: str = None) -> ModelLogAdapter:
    return ModelLogAdapter(logger, {"model": model_name, "scope": scope})


def log_event(logger, tag: str, message: str, level: int = logging.DEBUG) -> None:
    """Emit `message` under `tag` through a logger or a `for_model` adapter."""
    logger.log(level, message, extra={"tag": tag})


def record_location(record: logging.LogRecord) -> str:
    model = getattr(record, "model", None)
    if not model:
        return ""
    scope = getattr(record, "scope", None)
    return f"{model}.{scope}" if scope else model


class GenFormatter(logging.Formatter):
    """`[TAG] Model.scope: message`; warnings without a tag are tagged WARN."""

    def format(self, record: logging.LogRecord) -> str:
        tag = getattr(record, "tag", None)
        if tag is None and record.levelno >= logging.WARNING:
            tag = "WARN" if record.levelno == logging.WARNING else "ERROR"

        message = record.getMessage()
        location = record_location(record)
        if location:
            message = f"{location}: {message}"
        if tag:
            message = f"[{tag}] {message}"
        return message


def configure_gen_logging(verbose: bool = False, quiet: bool = False, stream=None) -> logging.Logger:
    """
    Route lbsdk.gen records to `stream` (stderr by default).

    -v shows per model, property and method detail (DEBUG), the default shows
    phases and skipped classes (INFO), -q keeps scope warnings and errors.
    Calling it again replaces the previous handler.
    """
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO

    root = logging.getLogger(ROOT_LOGGER)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(GenFormatter())
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False
    return root
