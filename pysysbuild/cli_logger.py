import datetime
import sys
import traceback
import os
from colorama import Fore, Style, init

# Initialize Colorama
init(autoreset=True)

LOG_DIR_ENV = "PYSYSBUILD_LOG_DIR"
VERBOSE_ENV = "PYSYSBUILD_VERBOSE"

# stdout belongs to the build orchestrator, every log line goes to stderr.


class Logger:
    def __init__(self, log_dir=None, verbose=None):
        self.log_file = None
        if verbose is None:
            verbose = os.environ.get(VERBOSE_ENV, "") not in ("", "0")
        self.verbose = verbose
        self.set_log_dir(log_dir if log_dir is not None else os.environ.get(LOG_DIR_ENV))

    def set_log_dir(self, log_dir):
        """Start appending plain-text entries to a timestamped file in log_dir."""
        if not log_dir:
            self.log_file = None
            return
        os.makedirs(log_dir, exist_ok=True)
        self.log_file = os.path.join(
            log_dir,
            f"pysysbuild_{datetime.datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
        )

    def _get_timestamp(self):
        return datetime.datetime.now().strftime("%H:%M:%S")

    def _log(self, level, message, color, stream=None, prefix="", show_timestamp=True, echo=True):
        stream = stream or sys.stderr
        if show_timestamp:
            timestamp = self._get_timestamp()
            log_message = f"[{timestamp}] [{level}] {message}\n"
            if echo:
                print(f"{color}{Style.BRIGHT}[{timestamp}]{Style.RESET_ALL} {prefix}{message}{Style.RESET_ALL}", file=stream)
        else:
            log_message = f"[{level}] {message}\n"
            if echo:
                print(f"{color}{prefix}{message}{Style.RESET_ALL}", file=stream)

        if self.log_file:
            with open(self.log_file, "a") as f:
                f.write(log_message)

    def info(self, message):
        self._log("INFO", message, Fore.CYAN)

    def step_info(self, message, indent=0):
        prefix = " " * indent
        self._log("", message, Fore.CYAN, prefix=prefix, show_timestamp=False)

    def success(self, message):
        self._log("SUCCESS", message, Fore.GREEN, prefix=f"{Style.BRIGHT}✓ {Style.RESET_ALL}{Fore.GREEN}")

    def warning(self, message):
        self._log("WARNING", message, Fore.YELLOW,
                  prefix=f"{Style.BRIGHT}⚠ {Style.RESET_ALL}{Fore.YELLOW}")

    def error(self, message):
        self._log("ERROR", message, Fore.RED,
                  prefix=f"{Style.BRIGHT}✖ {Style.RESET_ALL}{Fore.RED}")

    def debug(self, message):
        # Still written to the log file when one is configured.
        self._log("DEBUG", message, Fore.WHITE + Style.DIM, echo=self.verbose)

    # -------- Exception logging --------
    def exception(self, exc_type, exc_value, exc_traceback):
        self.error(f"An unhandled exception occurred: {exc_value}")
        self.traceback(exc_type, exc_value, exc_traceback)

    def traceback(self, exc_type, exc_value, exc_traceback):
        """Log a formatted traceback at debug level."""
        formatted_lines = traceback.format_exception(exc_type, exc_value, exc_traceback)
        for line in formatted_lines:
            for sub_line in line.splitlines():
                if sub_line.strip():
                    self._log("TRACEBACK", f">> {sub_line}", Fore.RED, echo=self.verbose)


# ---------------- Helper ----------------
logger = Logger()
