"""
Head Viewer - Main Entry Point

Loads the head shape and data files and opens the PySide6 viewer window.
Input paths default to data/head_shape.csv and data/data.csv and can be
overridden with HEAD_VIEWER_SHAPE / HEAD_VIEWER_DATA.
"""
import logging
import sys

from PySide6 import QtWidgets

from head_viewer.app.desktop.main_window import MainWindow
from head_viewer.core.config import ViewerConfig


def main(argv):
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = QtWidgets.QApplication(argv)
    window = MainWindow(ViewerConfig.from_env())
    window.show()

    print("Head Viewer started.")
    print("Controls: Left Click to Orbit, Right Click to Pan, Scroll to Zoom.")
    print("Key 'Space': Play / Pause.")
    print("Keys 'Left' / 'Right': Step backward / forward.")
    return app.exec()


if __name__ == "__main__":
    sys.exit(main(sys.argv))
