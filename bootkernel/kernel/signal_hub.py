"""
信号中枢 - 内核生命周期事件的发布/订阅
Signal Hub - publish/subscribe for kernel lifecycle events.

内核只依赖 notify(event) 这一能力；SignalHub 是默认实现，
按事件类型把事件分发给已连接的处理器，支持优先级、过滤和一次性订阅。
The kernel only depends on a notify(event) capability; SignalHub is the
default implementation and dispatches events to connected handlers by kind,
with priority ordering, filters and one-shot subscriptions.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class SignalPriority(Enum):
    """信号处理器优先级 / Signal handler priority."""

    HIGHEST = 0
    HIGH = 25
    NORMAL = 50
    LOW = 75
    LOWEST = 100


class KernelEventKind(str, Enum):
    """内核生命周期事件类型 / Kernel lifecycle event kinds."""

    BOOTING = "kernel.booting"
    BOOTED = "kernel.booted"


@dataclass
class KernelEvent:
    """
    内核事件 - 携带内核引用和事件类型
    Kernel event - carries the kernel and a discriminator.
    """

    kernel: Any
    kind: KernelEventKind | str
    # 是否已消费（消费后不再传播）
    consumed: bool = False
    # 附加元数据
    metadata: dict[str, Any] = field(default_factory=dict)

    def consume(self) -> None:
        """标记事件为已消费，阻止后续处理器处理 / Mark event as consumed."""
        self.consumed = True


@dataclass
class KernelBooting(KernelEvent):
    """Announced once the kernel has entered the booting state."""

    kind: KernelEventKind | str = field(default=KernelEventKind.BOOTING, init=False)


@dataclass
class KernelBooted(KernelEvent):
    """Announced once the kernel has entered the booted state."""

    kind: KernelEventKind | str = field(default=KernelEventKind.BOOTED, init=False)


@dataclass
class SlotBinding:
    """
    槽绑定 - 将处理器绑定到事件类型上
    Slot binding - binds a handler to an event kind.
    """

    kind: str
    handler: Callable[[Any], Any]
    priority: SignalPriority = SignalPriority.NORMAL
    # 可选过滤函数，返回 True 才执行
    filter_fn: Callable[[Any], bool] | None = None
    # 唯一标识
    slot_id: str = ""
    # 是否只触发一次
    once: bool = False


def _kind_key(kind: Enum | str) -> str:
    return kind.value if isinstance(kind, Enum) else kind


class SignalHub:
    """
    信号中枢 - 管理事件订阅和同步分发
    Signal hub - manages subscriptions and synchronous dispatching.

    处理器按优先级执行；单个处理器出错只记录日志，不影响其他处理器。
    Handlers run in priority order; a failing handler is logged and does not
    stop the others.
    """

    def __init__(self) -> None:
        # 事件类型 -> 槽绑定列表
        self._slots: dict[str, list[SlotBinding]] = {}
        self._counter = 0

    def connect(
        self,
        kind: KernelEventKind | str,
        handler: Callable[[Any], Any],
        priority: SignalPriority = SignalPriority.NORMAL,
        filter_fn: Callable[[Any], bool] | None = None,
        once: bool = False,
    ) -> str:
        """
        连接处理器到事件类型
        Connect a handler to an event kind.

        返回 slot_id，可用于 disconnect。
        Returns slot_id for later disconnection.
        """
        kind_key = _kind_key(kind)
        self._counter += 1
        slot_id = f"slot_{self._counter}"

        binding = SlotBinding(
            kind=kind_key,
            handler=handler,
            priority=priority,
            filter_fn=filter_fn,
            slot_id=slot_id,
            once=once,
        )

        bindings = self._slots.setdefault(kind_key, [])
        bindings.append(binding)
        # 按优先级排序（稳定排序，同优先级保持连接顺序）
        bindings.sort(key=lambda b: b.priority.value)

        logger.debug("已连接槽 %s 到事件 %s", slot_id, kind_key)
        return slot_id

    def disconnect(self, slot_id: str) -> bool:
        """
        断开指定 slot 的连接
        Disconnect a specific slot.
        """
        for bindings in self._slots.values():
            for binding in bindings:
                if binding.slot_id == slot_id:
                    bindings.remove(binding)
                    logger.debug("已断开槽 %s", slot_id)
                    return True
        return False

    def notify(self, event: Any) -> None:
        """
        分发事件，触发所有匹配的处理器
        Dispatch an event to every matching handler.
        """
        kind_key = _kind_key(getattr(event, "kind", type(event).__name__))
        to_remove: list[SlotBinding] = []

        for binding in list(self._slots.get(kind_key, [])):
            if getattr(event, "consumed", False):
                break

            # 过滤器检查
            if binding.filter_fn is not None and not binding.filter_fn(event):
                continue

            try:
                binding.handler(event)
            except Exception:
                logger.exception(
                    "事件处理器 %s 处理 %s 时出错",
                    binding.slot_id,
                    kind_key,
                )

            if binding.once:
                to_remove.append(binding)

        # 清理一次性槽
        for binding in to_remove:
            bindings = self._slots.get(kind_key, [])
            if binding in bindings:
                bindings.remove(binding)

    def slot_count(self, kind: KernelEventKind | str | None = None) -> int:
        """获取槽绑定数量 / Get the number of slot bindings."""
        if kind is None:
            return sum(len(bindings) for bindings in self._slots.values())
        return len(self._slots.get(_kind_key(kind), []))

    def clear(self) -> None:
        """清除所有槽绑定 / Clear all slot bindings."""
        self._slots.clear()
