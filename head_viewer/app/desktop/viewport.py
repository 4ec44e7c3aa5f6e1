"""
WebGPU Viewport for the Head Viewer.

Uses QRenderWidget from rendercanvas.qt for native Qt-WebGPU integration.
Draws whatever the attached renderer holds; scene updates happen in the
main window's frame loop.
"""

import logging

import wgpu
from PySide6.QtCore import Qt
from PySide6.QtGui import QMouseEvent, QWheelEvent
from rendercanvas.qt import QRenderWidget

logger = logging.getLogger(__name__)


class WgpuViewport(QRenderWidget):
    """
    A PySide6 widget that renders the head using WebGPU.

    Uses QRenderWidget for native Qt-WebGPU integration via rendercanvas.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self.renderer = None
        self.camera = None

        # WebGPU resources
        self.adapter = None
        self.device = None
        self._context = None
        self._render_format = None
        self._gpu_ready = False

        # Enable mouse tracking for smooth interaction
        self.setMouseTracking(True)

        self.request_draw(self._draw_frame)

    @property
    def render_format(self):
        return self._render_format

    def set_renderer(self, renderer):
        """Set the head renderer."""
        self.renderer = renderer

    def set_camera(self, camera):
        """Set the camera for navigation."""
        self.camera = camera

    def ensure_initialized(self):
        """Initialize WebGPU resources; returns True once a device is ready."""
        if self._gpu_ready:
            return True

        try:
            # Request adapter and device
            self.adapter = wgpu.gpu.request_adapter_sync(power_preference="high-performance")
            if self.adapter is None:
                logger.error("Failed to get WebGPU adapter")
                return False

            self.device = self.adapter.request_device_sync()

            # Get the wgpu context from the canvas
            self._context = self.get_context("wgpu")
            if self._context is None:
                logger.error("Failed to get wgpu context")
                return False

            # Get preferred format and configure the surface
            self._render_format = self._context.get_preferred_format(self.adapter)
            self._context.configure(
                device=self.device,
                format=self._render_format,
            )

            self._gpu_ready = True
            logger.info("WebGPU initialized. Format: %s", self._render_format)
            return True

        except Exception:
            logger.exception("WebGPU initialization error")
            return False

    def _draw_frame(self):
        """Render a frame using WebGPU."""
        if not self.ensure_initialized():
            return

        try:
            # Get current texture from the swap chain
            current_texture = self._context.get_current_texture()
            if current_texture is None:
                return

            current_view = current_texture.create_view()
            size = current_texture.size
            if size[1] == 0:
                return

            aspect = size[0] / size[1]

            if self.renderer and self.camera:
                # Ensure renderer pipelines match the current texture format
                self.renderer.ensure_format(current_texture.format)

                self.renderer.draw(
                    target_texture_view=current_view,
                    aspect_ratio=aspect,
                    view_matrix=self.camera.get_view_matrix(),
                    size=size[:2],
                    camera_pos=self.camera.position,
                )
            else:
                # Clear to black if no renderer
                self._clear_to_black(current_view)

        except Exception:
            logger.exception("Render error")

    def _clear_to_black(self, texture_view):
        """Clear the screen to black when no renderer is available."""
        encoder = self.device.create_command_encoder()
        render_pass = encoder.begin_render_pass(
            color_attachments=[{
                "view": texture_view,
                "load_op": wgpu.LoadOp.clear,
                "store_op": wgpu.StoreOp.store,
                "clear_value": (0.0, 0.0, 0.0, 1.0),
            }]
        )
        render_pass.end()
        self.device.queue.submit([encoder.finish()])

    # ─────────────────────────────────────────────────────────────────────────
    # Mouse Event Handling
    # ─────────────────────────────────────────────────────────────────────────

    def mousePressEvent(self, event: QMouseEvent):
        if self.camera:
            button = 1 if event.button() == Qt.MouseButton.LeftButton else 2
            self.camera.handle_event({
                "event_type": "pointer_down",
                "x": event.position().x(),
                "y": event.position().y(),
                "button": button,
            })
        super().mousePressEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent):
        if self.camera:
            button = 1 if event.button() == Qt.MouseButton.LeftButton else 2
            self.camera.handle_event({
                "event_type": "pointer_up",
                "x": event.position().x(),
                "y": event.position().y(),
                "button": button,
            })
        super().mouseReleaseEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent):
        if self.camera:
            self.camera.handle_event({
                "event_type": "pointer_move",
                "x": event.position().x(),
                "y": event.position().y(),
                "button": 0,
            })
        super().mouseMoveEvent(event)

    def wheelEvent(self, event: QWheelEvent):
        if self.camera:
            self.camera.handle_event({
                "event_type": "wheel",
                "dy": -event.angleDelta().y(),
                "x": event.position().x(),
                "y": event.position().y(),
            })
        super().wheelEvent(event)

    def keyPressEvent(self, event):
        """Forward key events to parent for handling."""
        event.ignore()
