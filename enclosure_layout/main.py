import logging
import os
import sys

from PySide6.QtWidgets import QApplication

from .main_window import APP_NAME, MainWindow


def main():
    logging.basicConfig(
        level=os.environ.get("ENCLOSURE_LAYOUT_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)

    window = MainWindow()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
