"""UI测试的配置和fixtures - 无头模式运行 Qt"""
import os

import pytest

# 没有显示器的 CI 上也能创建 QApplication
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from sonicviz.core.services.qt_scheduler import QtScheduler
from sonicviz.ui import VisualizerWidget
from sonicviz.visual import VisualizerView


@pytest.fixture
def qt_scheduler(qapp):
    return QtScheduler()


@pytest.fixture
def visualizer_widget(qtbot, qt_scheduler):
    """挂好视图的可视化控件，测试结束后释放"""
    view = VisualizerView(qt_scheduler)
    widget = VisualizerWidget(view)
    widget.resize(400, 300)
    qtbot.addWidget(widget)
    yield widget
    view.release()


# ============= pytest-qt 配置 =============

@pytest.fixture(scope="session")
def qapp_args():
    """配置QApplication参数用于测试"""
    return ["--platform", "offscreen"]  # 无头模式,不显示窗口


@pytest.fixture
def qtbot_wait_time():
    """配置qtbot的等待超时时间"""
    return 1000
