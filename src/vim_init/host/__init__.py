"""Host-owned state: registries, buffers, views and ex commands."""

from .buffers import BufferInfo, BufferList, View, ViewStore
from .commands import BUILTIN_COLORSCHEMES, CommandTable
from .context import DispatchResult, HostCall, HostContext, KeymapInvocation

__all__ = [
    "BUILTIN_COLORSCHEMES",
    "BufferInfo",
    "BufferList",
    "CommandTable",
    "DispatchResult",
    "HostCall",
    "HostContext",
    "KeymapInvocation",
    "View",
    "ViewStore",
]
