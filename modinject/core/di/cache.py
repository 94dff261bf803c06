"""
实例缓存

每个 token 对应一个缓存槽: EMPTY（未请求）/ IN_PROGRESS（正在解析）/ READY（已解析的单例）
EMPTY 不单独存储，缓存中没有该 token 即为 EMPTY
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class SlotState(Enum):
    """缓存槽状态"""

    EMPTY = 'empty'
    IN_PROGRESS = 'in_progress'
    READY = 'ready'


@dataclass(frozen=True)
class CacheSlot:
    """带状态标记的缓存槽"""

    state: SlotState
    value: Any = None

    @classmethod
    def ready(cls, value: Any) -> 'CacheSlot':
        return cls(SlotState.READY, value)

    @property
    def is_ready(self) -> bool:
        return self.state is SlotState.READY

    @property
    def in_progress(self) -> bool:
        return self.state is SlotState.IN_PROGRESS


EMPTY = CacheSlot(SlotState.EMPTY)
IN_PROGRESS = CacheSlot(SlotState.IN_PROGRESS)


class InstanceCache:
    """token -> CacheSlot"""

    def __init__(self):
        self._slots: Dict[str, CacheSlot] = {}

    def slot(self, token: str) -> CacheSlot:
        return self._slots.get(token, EMPTY)

    def put(self, token: str, value: Any) -> None:
        self._slots[token] = CacheSlot.ready(value)

    def mark_in_progress(self, token: str) -> None:
        self._slots[token] = IN_PROGRESS

    def reset(self, token: str) -> None:
        """恢复为 EMPTY，下次 get 会重新调用工厂"""
        self._slots.pop(token, None)

    def __contains__(self, token: str) -> bool:
        return token in self._slots
