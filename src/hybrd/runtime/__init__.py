"""Runtime - message processing and ingress."""

from hybrd.runtime.listener import ERROR_REPLY, MessageListener
from hybrd.runtime.processor import (
    MessageProcessor,
    ProcessorState,
    ProcessResult,
    ProcessStatus,
)

__all__ = [
    "ERROR_REPLY",
    "MessageListener",
    "MessageProcessor",
    "ProcessResult",
    "ProcessStatus",
    "ProcessorState",
]
