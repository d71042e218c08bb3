"""可视化状态定义"""

from enum import Enum


class VisualizerState(Enum):
    """可视化生命周期状态

    UNINITIALIZED → ACTIVE ⇄ PAUSED → RELEASED
    """

    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    PAUSED = "paused"
    RELEASED = "released"
