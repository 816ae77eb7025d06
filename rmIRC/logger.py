from typing import Any, Optional, TextIO
from datetime import datetime
import sys

class LogLevel:
    """
    Levels understood by Logger. WARN and above go to stderr.
    """
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40

LOG_PREFIX = {
    "NET": "[NET]",
    "ERROR": "[ERROR]",
    "WARN": "[WARN]",
    "RAW": "[RAW]",
    "DISPATCH": "[DISPATCH]",
    "CORE": "[CORE]",
    "PLUGIN": "[PLUGIN]",
    "POOL": "[POOL]",
    "PERM": "[PERMISSION]"
}

TIME_FORMAT = '%Y-%m-%d %H:%M:%S'


class Logger:
    """
    Writes `<time> [PREFIX] message` lines to the console and, optionally, to
    an append-mode log file. Messages are LOG_* templates from
    rmIRC.logMessages filled in with keyword arguments.
    >>> logger.warning("POOL", LOG_POOL_LINE_BLANK, location="rmap/A.txt", lineno=3)
    """
    def __init__(self, file_path: Optional[str] = None, min_level: int = LogLevel.INFO):
        """
        @kwarg file_path: Log file to append to, if any. (default: None)
        @kwarg min_level: Messages below this LogLevel are dropped. (default: LogLevel.INFO)
        """
        self.file_path = file_path
        self.min_level = min_level
        self.log_file: Optional[TextIO] = None

        if file_path:
            try:
                self.log_file = open(file_path, 'a', encoding='utf-8', buffering=1)
            except OSError as e:
                print(f"[LOGGER INIT ERROR] Could not open log file '{file_path}': {e}", file=sys.stderr)
                self.file_path = None

    def log(self, level: int, prefix_key: str, log_constant: str, **kwargs: Any):
        if level < self.min_level:
            return

        timestamp = datetime.now().strftime(TIME_FORMAT)
        try:
            line = f"{timestamp} {LOG_PREFIX.get(prefix_key, '[UNKNOWN]')} {log_constant.format(**kwargs)}"
        except (KeyError, IndexError, ValueError) as e:
            line = f"{timestamp} [LOGGER FATAL] Failed to format: {log_constant}. Error: {e}"

        print(line, file=sys.stderr if level >= LogLevel.WARN else sys.stdout)
        if self.log_file is not None:
            try:
                self.log_file.write(line + '\n')
            except OSError:
                print("[LOGGER FILE WRITE ERROR] Failed to write to log file.", file=sys.stderr)

    def debug(self, prefix_key: str, log_constant: str, **kwargs: Any):
        self.log(LogLevel.DEBUG, prefix_key, log_constant, **kwargs)

    def info(self, prefix_key: str, log_constant: str, **kwargs: Any):
        self.log(LogLevel.INFO, prefix_key, log_constant, **kwargs)

    def warning(self, prefix_key: str, log_constant: str, **kwargs: Any):
        """
        For data that was skipped or truncated but did not stop the operation.
        """
        self.log(LogLevel.WARN, prefix_key, log_constant, **kwargs)

    def error(self, prefix_key: str, log_constant: str, **kwargs: Any):
        self.log(LogLevel.ERROR, prefix_key, log_constant, **kwargs)

    def raw_recv(self, line: str):
        self.log(LogLevel.DEBUG, "RAW", "<- {line}", line=line)

    def raw_send(self, message: str):
        self.log(LogLevel.DEBUG, "RAW", "-> {message}", message=message)

    def close(self):
        if self.log_file is not None:
            self.log_file.close()
            self.log_file = None

    def __del__(self):
        self.close()


class NullLogger:
    """
    Discards everything. Used when no logger is given.
    """
    def __init__(self, *args, **kwargs): pass
    def log(self, *args, **kwargs): pass
    def debug(self, *args, **kwargs): pass
    def info(self, *args, **kwargs): pass
    def warning(self, *args, **kwargs): pass
    def error(self, *args, **kwargs): pass
    def raw_recv(self, *args, **kwargs): pass
    def raw_send(self, *args, **kwargs): pass
    def close(self): pass
