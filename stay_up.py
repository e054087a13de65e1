import logging
import signal

from mouse_stay_up.config import DEV_MODE
from mouse_stay_up.error_logging import init_error_logging
from mouse_stay_up.tray import TrayApp


def main():
    signal.signal(signal.SIGINT, signal.SIG_IGN)
    if hasattr(signal, "SIGBREAK"):
        signal.signal(signal.SIGBREAK, signal.SIG_IGN)
    init_error_logging()
    if DEV_MODE:
        logging.info("Running in developer mode")

    app = TrayApp()
    app.run()


if __name__ == "__main__":
    main()
