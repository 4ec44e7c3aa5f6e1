from PySide6 import QtWidgets, QtCore
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg
from matplotlib.figure import Figure

class TraceBrowser(QtWidgets.QWidget):
    """
    Widget that displays every point's scalar series as a butterfly plot,
    with a marker at the current timestep.
    """
    def __init__(self, title="Head Data Traces", parent=None):
        super().__init__(parent)
        self.title = title
        self.layout = QtWidgets.QVBoxLayout(self)
        self.layout.setContentsMargins(0, 0, 0, 0)

        self.figure = None
        self.canvas = None
        self.cursor = None

        # Placeholder Label
        self.placeholder = QtWidgets.QLabel("No head data loaded")
        self.placeholder.setAlignment(QtCore.Qt.AlignCenter)
        self.layout.addWidget(self.placeholder)

    def set_data(self, values, value_range):
        """Plot a (n_points, n_times) series array."""
        if self.canvas:
            self.layout.removeWidget(self.canvas)
            self.canvas.deleteLater()
            self.canvas = None

        self.placeholder.setVisible(False)

        self.figure = Figure(figsize=(8, 2), dpi=100)
        ax = self.figure.add_subplot(111)

        # Timesteps on X, values on Y
        ax.plot(values.T, linewidth=0.5, alpha=0.5)
        if value_range.span > 0:
            ax.set_ylim(value_range.min, value_range.max)
        self.cursor = ax.axvline(0, color="yellow", linewidth=1.5)

        ax.set_title(self.title)
        ax.set_xlabel("Timestep")
        ax.set_ylabel("Value")
        ax.grid(True)
        self.figure.tight_layout()

        self.canvas = FigureCanvasQTAgg(self.figure)
        self.layout.addWidget(self.canvas)
        self.canvas.draw_idle()

    def set_current_time(self, t):
        if self.cursor is None:
            return
        self.cursor.set_xdata([t, t])
        self.canvas.draw_idle()
