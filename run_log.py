"""
run_log.py
Append-only error log and run-summary log for one collection run.

A RunLogger is created by the entry point, opened at run start and handed to
the components that need to report errors. Write failures are reported on
stderr by logging's own handleError and never interrupt the run.
"""
import logging
import socket
from datetime import datetime


def get_local_ip():
    """First non-loopback IPv4 address of this host, or 'unknown'."""
    try:
        _, _, addresses = socket.gethostbyname_ex(socket.gethostname())
    except OSError:
        addresses = []
    for addr in addresses:
        if not addr.startswith("127."):
            return addr

    # Routing trick: no packet is sent for a UDP connect.
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
            s.connect(("10.255.255.255", 1))
            addr = s.getsockname()[0]
            if addr and not addr.startswith("127."):
                return addr
    except OSError:
        pass
    return "unknown"


class _RFC3339Formatter(logging.Formatter):
    def formatTime(self, record, datefmt=None):
        return datetime.fromtimestamp(record.created).astimezone().isoformat(timespec="seconds")


class _BestEffortFileHandler(logging.FileHandler):
    def emit(self, record):
        # FileHandler opens lazily and lets the open() failure escape.
        try:
            super().emit(record)
        except OSError:
            self.handleError(record)


class _HostIPFilter(logging.Filter):
    def __init__(self, ip):
        super().__init__()
        self.ip = ip

    def filter(self, record):
        record.ip = self.ip
        return True


class RunLogger:
    def __init__(self, error_log_path="error.log", app_log_path="app.log", ip=None):
        self.error_log_path = error_log_path
        self.app_log_path = app_log_path
        self.ip = ip
        # Not registered with logging.getLogger, so nothing leaks between runs.
        self._errors = logging.Logger("related_search.errors", logging.INFO)
        self._app = logging.Logger("related_search.app", logging.INFO)
        self._handlers = []

    def _attach(self, logger, path, fmt):
        # delay=True: the file is only opened on the first write.
        handler = _BestEffortFileHandler(path, mode="a", encoding="utf-8", delay=True)
        handler.setFormatter(_RFC3339Formatter(fmt))
        handler.addFilter(_HostIPFilter(self.ip))
        logger.addHandler(handler)
        self._handlers.append((logger, handler))

    def open(self):
        if self._handlers:
            return self
        if self.ip is None:
            self.ip = get_local_ip()
        self._attach(
            self._errors, self.error_log_path,
            "%(asctime)s: %(message)s (File: %(pathname)s, Line: %(lineno)d, IP: %(ip)s)")
        self._attach(
            self._app, self.app_log_path,
            "%(asctime)s: %(message)s, IP: %(ip)s")
        return self

    def error(self, message, stacklevel=1):
        """Record an error; the location logged is the caller's, not this method's."""
        self._errors.error(message, stacklevel=stacklevel + 1)

    def summary(self, total_count):
        self._app.info(f"총 데이터 개수: {total_count}")

    def close(self):
        for logger, handler in self._handlers:
            logger.removeHandler(handler)
            handler.close()
        self._handlers = []

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
