from .observable import Dispatcher, LiveQuery, Observable, Subscription, deliver_inline
from .write_queue import WriteQueue

__all__ = [
    "Dispatcher",
    "LiveQuery",
    "Observable",
    "Subscription",
    "WriteQueue",
    "deliver_inline",
]
