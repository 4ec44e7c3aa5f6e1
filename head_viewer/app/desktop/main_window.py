"""
Head Viewer - Main Window

PySide6 main window with embedded WebGPU head viewer.
"""

import logging
import time

from PySide6 import QtWidgets, QtCore

from head_viewer.core.config import ViewerConfig
from head_viewer.core.data import load_head_data
from head_viewer.core.head import HeadModel
from head_viewer.vis.camera import Camera
from head_viewer.vis.renderer import HeadRenderer
from head_viewer.vis.scene import Scene
from .trace_browser import TraceBrowser
from .viewport import WgpuViewport
from .widgets import HeadInfoPanel, PlaybackControls

logger = logging.getLogger(__name__)


class MainWindow(QtWidgets.QMainWindow):
    """
    Main application window for the Head Viewer.

    Contains the WebGPU viewport for head rendering, the butterfly trace
    plot, and Qt controls for playback.
    """

    def __init__(self, config=None):
        super().__init__()
        self.setWindowTitle("Head Viewer")
        self.resize(1200, 800)

        # Core State
        self.config = config or ViewerConfig()
        self.scene = Scene()
        self.head = None
        self.head_renderer = None
        self.camera = None
        self._last_frame = None

        # Build UI
        self._setup_ui()

        # Load data (failures propagate; the window is never shown half-built)
        self._load_data()

        # Connect signals
        self._connect_signals()

        # Frame timer
        self.timer = QtCore.QTimer()
        self.timer.setInterval(self.config.frame_interval_ms)
        self.timer.timeout.connect(self._game_loop)

    def _setup_ui(self):
        """Create the UI layout."""
        # Central widget
        self.central_widget = QtWidgets.QWidget()
        self.setCentralWidget(self.central_widget)
        self.main_layout = QtWidgets.QVBoxLayout(self.central_widget)
        self.main_layout.setContentsMargins(0, 0, 0, 0)

        # Viewport (main rendering area)
        self.viewport = WgpuViewport()
        self.viewport.setSizePolicy(
            QtWidgets.QSizePolicy.Expanding,
            QtWidgets.QSizePolicy.Expanding
        )

        # Butterfly plot and playback controls (bottom)
        self.traces = TraceBrowser()
        self.traces.setMaximumHeight(220)
        self.playback = PlaybackControls()

        self.main_layout.addWidget(self.viewport, stretch=1)
        self.main_layout.addWidget(self.traces, stretch=0)
        self.main_layout.addWidget(self.playback, stretch=0)

        # Sidebar dock
        self.dock = QtWidgets.QDockWidget("Head", self)
        self.dock.setAllowedAreas(
            QtCore.Qt.LeftDockWidgetArea | QtCore.Qt.RightDockWidgetArea
        )
        self.info = HeadInfoPanel()
        self.dock.setWidget(self.info)
        self.addDockWidget(QtCore.Qt.RightDockWidgetArea, self.dock)

    def _load_data(self):
        """Load head data and build the point cloud (blocking)."""
        logger.info("Loading Data...")
        data = load_head_data(self.config.shape_path, self.config.data_path)
        self.head = HeadModel(self.scene, data, self.config)
        logger.info("Data Loaded.")

        self.info.set_files(self.config.shape_path, self.config.data_path)
        self.info.set_summary(data.n_points, data.n_times, self.head.value_range)
        self.traces.set_data(data.values, self.head.value_range)
        self.playback.set_time_range(data.n_times)
        self.playback.set_playing(False)

    def _connect_signals(self):
        """Connect UI signals to slots."""
        self.playback.play_clicked.connect(self._on_play)
        self.playback.pause_clicked.connect(self._on_pause)
        self.playback.step_forward_clicked.connect(self.head.playback.step_forward)
        self.playback.step_backward_clicked.connect(self.head.playback.step_backward)
        self.playback.time_selected.connect(self.head.playback.set_time)
        self.info.traces_toggled.connect(self.traces.setVisible)

        self.head.add_label_listener(self.playback.set_label)
        self.head.playback.add_listener(self.playback.set_current_time)
        self.head.playback.add_listener(self.traces.set_current_time)

    def showEvent(self, event):
        """Initialize rendering after window is shown."""
        super().showEvent(event)
        if self.head_renderer is None:
            # Delay initialization until viewport is ready
            QtCore.QTimer.singleShot(100, self._init_rendering)

    def _init_rendering(self):
        """Initialize the renderer once the viewport has a device."""
        if not self.viewport.ensure_initialized():
            logger.error("WebGPU device not available")
            return

        self.head_renderer = HeadRenderer(
            self.viewport.device, self.scene, self.viewport.render_format
        )

        # Camera
        self.camera = Camera(self.viewport, distance=4.0)
        self.viewport.set_camera(self.camera)
        self.viewport.set_renderer(self.head_renderer)

        # Start animation
        self._last_frame = time.perf_counter()
        self.timer.start()
        self.viewport.request_draw()

    def _game_loop(self):
        """Per-frame update called by timer."""
        now = time.perf_counter()
        dt = now - self._last_frame
        self._last_frame = now

        self.head.tick(dt)

        # Trigger repaint
        self.viewport.request_draw()

    # ─────────────────────────────────────────────────────────────────────────
    # UI Event Handlers
    # ─────────────────────────────────────────────────────────────────────────

    def _on_play(self):
        self.head.playback.play()
        self.playback.set_playing(True)

    def _on_pause(self):
        self.head.playback.pause()
        self.playback.set_playing(False)

    def keyPressEvent(self, event):
        """Handle keyboard shortcuts."""
        key = event.key()

        if key == QtCore.Qt.Key_Space:
            # Toggle play/pause
            self.head.playback.toggle()
            self.playback.set_playing(self.head.playback.is_playing)

        elif key == QtCore.Qt.Key_Right:
            self.head.playback.step_forward()

        elif key == QtCore.Qt.Key_Left:
            self.head.playback.step_backward()

        else:
            super().keyPressEvent(event)
