"""SonicViz 应用组装

把 Qt 调度器、可视化视图、显示控件和播放控制器接到一起。宿主程序
只需提供播放器和采集点（通常是 AudioSessionRegistry）::

    registry = AudioSessionRegistry()
    app = VisualizerApp.from_config_file(player, registry)
    layout.addWidget(app.widget)
    ...
    app.shutdown()
"""

from pathlib import Path
from typing import Optional

from PySide6.QtWidgets import QWidget

from .core.controllers import PlaybackController
from .core.interfaces.capture import ITapProvider
from .core.interfaces.permission import IPermissionService
from .core.interfaces.player import IMediaPlayer
from .core.services.config import VisualizerConfig, load_visualizer_config
from .core.services.qt_scheduler import QtScheduler
from .ui import VisualizerWidget
from .utils import ErrorReporter, app_logger
from .visual import VisualizerView


class VisualizerApp:
    """一个播放器对应的完整可视化组件

    必须在 QApplication 所在线程中创建，所有周期任务都挂在该线程的事件循环上。
    """

    def __init__(
        self,
        player: IMediaPlayer,
        tap_provider: ITapProvider,
        config: Optional[VisualizerConfig] = None,
        permission_service: Optional[IPermissionService] = None,
        error_reporter: Optional[ErrorReporter] = None,
        parent: Optional[QWidget] = None,
    ):
        self._config = config or VisualizerConfig()
        self._scheduler = QtScheduler()
        self._view = VisualizerView(
            self._scheduler,
            animation_settings=self._config.animation,
            render_settings=self._config.render,
        )
        self._widget = VisualizerWidget(self._view, parent)
        self._controller = PlaybackController(
            player=player,
            view=self._view,
            tap_provider=tap_provider,
            scheduler=self._scheduler,
            permission_service=permission_service,
            config=self._config,
            error_reporter=error_reporter,
        )
        app_logger.log_lifecycle_event(
            "Visualizer app assembled",
            {"drawing_mode": self._config.render.drawing_mode},
        )

    @classmethod
    def from_config_file(
        cls,
        player: IMediaPlayer,
        tap_provider: ITapProvider,
        config_path: Optional[Path] = None,
        **kwargs,
    ) -> "VisualizerApp":
        """从配置文件构建（None 使用默认配置目录）"""
        return cls(player, tap_provider, config=load_visualizer_config(config_path), **kwargs)

    def shutdown(self) -> None:
        """释放可视化、进度轮询和视图，可重复调用"""
        self._controller.shutdown()

    @property
    def widget(self) -> VisualizerWidget:
        return self._widget

    @property
    def view(self) -> VisualizerView:
        return self._view

    @property
    def controller(self) -> PlaybackController:
        return self._controller

    @property
    def scheduler(self) -> QtScheduler:
        return self._scheduler

    @property
    def config(self) -> VisualizerConfig:
        return self._config
