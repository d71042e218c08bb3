"""pytest 配置和全局 fixtures"""
import os
import sys
import tempfile
from pathlib import Path

import numpy as np
import pytest

# 添加 src 和 tests 到 path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent))

# 日志写到临时目录，避免污染用户目录
os.environ.setdefault("SONICVIZ_LOG_DIR", tempfile.mkdtemp(prefix="sonicviz-test-logs-"))

from sonicviz.audio import AudioSessionRegistry, WaveformRecorder
from sonicviz.core.interfaces import Song
from sonicviz.core.services.config import RecorderSettings, VisualizerConfig
from sonicviz.utils import ErrorReporter
from sonicviz.visual import VisualizerView

from mocks import ManualScheduler, MockMediaPlayer, MockPermissionService, RecordingSurface


# ============= 基础 Fixtures =============

@pytest.fixture
def scheduler():
    """手动推进的调度器"""
    return ManualScheduler()


@pytest.fixture
def registry():
    """音频会话注册表"""
    return AudioSessionRegistry()


@pytest.fixture
def session_id(registry):
    """一个已打开、已写入一段正弦波的音频会话"""
    sid = registry.open_session(sampling_rate=44100)
    t = np.arange(4096) / 44100.0
    registry.publish(sid, 0.5 * np.sin(2 * np.pi * 440.0 * t))
    return sid


@pytest.fixture
def player(session_id):
    """持有有效会话ID的 Mock 播放器"""
    return MockMediaPlayer(session_id=session_id)


@pytest.fixture
def song():
    return Song(id=1, title="Hello World!", artist="Test", duration_hint_ms=180000)


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def view(scheduler, surface):
    view = VisualizerView(scheduler, surface=surface)
    yield view
    view.release()


@pytest.fixture
def config(tmp_path):
    """录制目录指向临时目录的默认配置"""
    return VisualizerConfig(recorder=RecorderSettings(output_dir=tmp_path / "recordings"))


@pytest.fixture
def recorder(tmp_path):
    return WaveformRecorder(tmp_path / "recordings")


@pytest.fixture
def error_reporter():
    """独立的错误上报通道，记录所有上报的错误"""
    reporter = ErrorReporter()
    reporter.reported = []
    reporter.subscribe(reporter.reported.append)
    return reporter


@pytest.fixture
def permissions():
    return MockPermissionService(granted=True)
