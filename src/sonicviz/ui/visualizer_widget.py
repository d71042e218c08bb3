"""可视化显示控件

VisualizerWidget 是 VisualizerView 的显示表面：视图请求重绘时调用 update()，
paintEvent 中取回绘制指令并用 QPainter 画出来。
"""

from typing import Optional, Sequence, Union

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import (
    QBrush,
    QColor,
    QLinearGradient,
    QPainter,
    QPainterPath,
    QPen,
    QRadialGradient,
)
from PySide6.QtWidgets import QWidget

from ..core.interfaces.display import Viewport
from ..utils import app_logger
from ..visual.commands import (
    DrawCommand,
    LinearGradient,
    RadialGradientFill,
    RoundedBars,
    StrokePath,
)
from ..visual.signal import DrawingMode
from ..visual.view import VisualizerView


def _set_color_stops(gradient, colors: Sequence[str]) -> None:
    """颜色均匀分布在 [0, 1] 上"""
    if len(colors) == 1:
        gradient.setColorAt(0.0, QColor(colors[0]))
        return
    last = len(colors) - 1
    for index, color in enumerate(colors):
        gradient.setColorAt(index / last, QColor(color))


def _linear_brush(gradient: LinearGradient) -> QBrush:
    qt_gradient = QLinearGradient(QPointF(*gradient.start), QPointF(*gradient.end))
    _set_color_stops(qt_gradient, gradient.colors)
    return QBrush(qt_gradient)


class VisualizerWidget(QWidget):
    """音频可视化控件"""

    def __init__(self, view: Optional[VisualizerView] = None, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setMinimumSize(200, 200)
        self.setAttribute(Qt.WidgetAttribute.WA_OpaquePaintEvent)

        self._view: Optional[VisualizerView] = None
        self._redraw_requests = 0
        if view is not None:
            self.set_view(view)

    def set_view(self, view: Optional[VisualizerView]) -> None:
        if self._view is not None:
            self._view.attach_surface(None)
        self._view = view
        if view is not None:
            view.attach_surface(self)

    @property
    def view(self) -> Optional[VisualizerView]:
        return self._view

    # ============ 显示表面接口 ============

    def request_redraw(self) -> None:
        self._redraw_requests += 1
        self.update()

    def viewport(self) -> Viewport:
        return Viewport(float(self.width()), float(self.height()))

    @property
    def redraw_requests(self) -> int:
        return self._redraw_requests

    def set_drawing_mode(self, mode: Union[str, DrawingMode]) -> None:
        if self._view is not None:
            self._view.set_drawing_mode(mode)

    # ============ 绘制 ============

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        try:
            if self._view is None:
                painter.fillRect(self.rect(), QColor("#002030"))
                return

            for command in self._view.render(self.viewport()):
                self._paint_command(painter, command)
        except Exception as e:
            app_logger.log_error(e, "visualizer_paint")
        finally:
            painter.end()

    def _paint_command(self, painter: QPainter, command: DrawCommand) -> None:
        if isinstance(command, RadialGradientFill):
            self._paint_background(painter, command)
        elif isinstance(command, StrokePath):
            self._paint_path(painter, command)
        elif isinstance(command, RoundedBars):
            self._paint_bars(painter, command)

    def _paint_background(self, painter: QPainter, command: RadialGradientFill) -> None:
        gradient = QRadialGradient(QPointF(*command.center), command.radius)
        _set_color_stops(gradient, command.colors)
        painter.fillRect(QRectF(*command.rect), QBrush(gradient))

    def _paint_path(self, painter: QPainter, command: StrokePath) -> None:
        if len(command.points) == 0:
            return

        path = QPainterPath()
        first_x, first_y = command.points[0]
        path.moveTo(float(first_x), float(first_y))
        for x, y in command.points[1:]:
            path.lineTo(float(x), float(y))
        if command.closed:
            path.closeSubpath()

        painter.save()
        if command.rotation:
            pivot_x, pivot_y = command.pivot
            painter.translate(pivot_x, pivot_y)
            painter.rotate(command.rotation)
            painter.translate(-pivot_x, -pivot_y)

        pen = QPen(_linear_brush(command.gradient), command.stroke_width)
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawPath(path)
        painter.restore()

    def _paint_bars(self, painter: QPainter, command: RoundedBars) -> None:
        painter.save()
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(_linear_brush(command.gradient))
        radius = command.corner_radius
        for left, top, right, bottom in command.rects:
            painter.drawRoundedRect(
                QRectF(float(left), float(top), float(right - left), float(bottom - top)),
                radius,
                radius,
            )
        painter.restore()

    def closeEvent(self, event):
        if self._view is not None:
            self._view.release()
        super().closeEvent(event)
