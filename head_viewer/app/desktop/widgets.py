from PySide6 import QtWidgets, QtCore
import os


class PlaybackControls(QtWidgets.QWidget):
    """
    Play/Pause and step buttons, timeline slider and current time label.
    """
    play_clicked = QtCore.Signal()
    pause_clicked = QtCore.Signal()
    step_backward_clicked = QtCore.Signal()
    step_forward_clicked = QtCore.Signal()
    time_selected = QtCore.Signal(int)  # timestep

    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QtWidgets.QHBoxLayout(self)

        self.btn_step_back = QtWidgets.QPushButton("<")
        self.btn_step_back.setToolTip("Previous timestep (Left)")
        self.btn_step_back.clicked.connect(self.step_backward_clicked.emit)

        self.btn_play = QtWidgets.QPushButton("Play")
        self.btn_play.clicked.connect(self.play_clicked.emit)

        self.btn_pause = QtWidgets.QPushButton("Pause")
        self.btn_pause.clicked.connect(self.pause_clicked.emit)

        self.btn_step_forward = QtWidgets.QPushButton(">")
        self.btn_step_forward.setToolTip("Next timestep (Right)")
        self.btn_step_forward.clicked.connect(self.step_forward_clicked.emit)

        self.slider = QtWidgets.QSlider(QtCore.Qt.Horizontal)
        self.slider.setRange(0, 0)
        self.slider.valueChanged.connect(self.time_selected.emit)

        self.lbl_time = QtWidgets.QLabel("Current Time: 0")
        self.lbl_time.setMinimumWidth(120)

        layout.addWidget(self.btn_step_back)
        layout.addWidget(self.btn_play)
        layout.addWidget(self.btn_pause)
        layout.addWidget(self.btn_step_forward)
        layout.addWidget(self.slider, stretch=1)
        layout.addWidget(self.lbl_time)

    def set_time_range(self, n_times):
        self.slider.setRange(0, max(n_times - 1, 0))

    def set_current_time(self, t):
        # Keep the slider in sync without re-emitting time_selected
        self.slider.blockSignals(True)
        self.slider.setValue(t)
        self.slider.blockSignals(False)

    def set_label(self, text):
        self.lbl_time.setText(text)

    def set_playing(self, playing):
        self.btn_play.setEnabled(not playing)
        self.btn_pause.setEnabled(playing)


class HeadInfoPanel(QtWidgets.QWidget):
    """
    Sidebar showing the loaded input files and dataset summary.
    """
    traces_toggled = QtCore.Signal(bool)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.layout = QtWidgets.QVBoxLayout(self)

        # Section 1: Input files
        grp_files = QtWidgets.QGroupBox("Input Files")
        f_layout = QtWidgets.QFormLayout()
        self.lbl_shape = QtWidgets.QLabel("None")
        self.lbl_data = QtWidgets.QLabel("None")
        for lbl in (self.lbl_shape, self.lbl_data):
            lbl.setStyleSheet("color: gray; font-style: italic;")
            lbl.setWordWrap(True)
        f_layout.addRow("Shape:", self.lbl_shape)
        f_layout.addRow("Data:", self.lbl_data)
        grp_files.setLayout(f_layout)

        # Section 2: Dataset summary
        grp_info = QtWidgets.QGroupBox("Dataset")
        i_layout = QtWidgets.QFormLayout()
        self.lbl_points = QtWidgets.QLabel("-")
        self.lbl_times = QtWidgets.QLabel("-")
        self.lbl_range = QtWidgets.QLabel("-")
        i_layout.addRow("Points:", self.lbl_points)
        i_layout.addRow("Timesteps:", self.lbl_times)
        i_layout.addRow("Range:", self.lbl_range)
        grp_info.setLayout(i_layout)

        # Section 3: Visibility
        self.check_traces = QtWidgets.QCheckBox("Show Butterfly Traces")
        self.check_traces.setChecked(True)
        self.check_traces.toggled.connect(self.traces_toggled.emit)

        self.layout.addWidget(grp_files)
        self.layout.addWidget(grp_info)
        self.layout.addWidget(self.check_traces)
        self.layout.addStretch(1)

    def set_files(self, shape_path, data_path):
        for lbl, path in ((self.lbl_shape, shape_path), (self.lbl_data, data_path)):
            lbl.setText(os.path.basename(str(path)))
            lbl.setStyleSheet("color: white;")
            lbl.setToolTip(str(path))

    def set_summary(self, n_points, n_times, value_range):
        self.lbl_points.setText(str(n_points))
        self.lbl_times.setText(str(n_times))
        self.lbl_range.setText(f"[{value_range.min:g}, {value_range.max:g}]")
