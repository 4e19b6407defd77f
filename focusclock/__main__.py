"""Allow running FocusClock as a module: python -m focusclock."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .settings import load_settings
from .app import FocusClockWindow


def main() -> None:
    settings = load_settings()
    logging.basicConfig(
        level=settings.logging_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)
    app.setApplicationName("FocusClock")
    app.setOrganizationName("FocusClock")

    window = FocusClockWindow(settings)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
