from .contracts import ConfigProvider, EventBus, MembershipSource
from .transport import ExecResult, ExecutionTransport

__all__ = [
    "ConfigProvider",
    "EventBus",
    "MembershipSource",
    "ExecResult",
    "ExecutionTransport",
]
