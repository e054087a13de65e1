import logging
import sys
import threading
from pathlib import Path

from .config import config_dir


class LazyErrorFileHandler(logging.Handler):
    """Writes ERROR records to a file that is only created on the first error."""

    def __init__(self, path: Path):
        super().__init__(level=logging.ERROR)
        self.path = path
        self._file_handler = None

    def _ensure_file_handler(self):
        if self._file_handler is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(self.path, mode="a", encoding="utf-8")
            fh.setLevel(logging.ERROR)
            fh.setFormatter(logging.Formatter(
                "%(asctime)s | %(levelname)s | %(threadName)s | %(name)s | %(message)s"
            ))
            self._file_handler = fh
        return self._file_handler

    def emit(self, record: logging.LogRecord):
        self._ensure_file_handler().emit(record)

    def close(self):
        if self._file_handler is not None:
            self._file_handler.close()
        super().close()


def init_error_logging(log_dir: Path | None = None, filename: str = "errors.log") -> LazyErrorFileHandler:
    handler = LazyErrorFileHandler((log_dir or config_dir()) / filename)
    logging.getLogger().addHandler(handler)

    def _handle_exc(exc_type, exc_value, exc_tb):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_tb)
        else:
            logging.getLogger().error(
                "Uncaught exception", exc_info=(exc_type, exc_value, exc_tb)
            )

    sys.excepthook = _handle_exc

    def _thread_exc(args: threading.ExceptHookArgs):
        logging.getLogger().error(
            "Exception in thread %s", args.thread.name if args.thread else "?",
            exc_info=(args.exc_type, args.exc_value, args.exc_traceback)
        )

    threading.excepthook = _thread_exc
    return handler
