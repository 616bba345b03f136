from src.application.event_dispatcher import EventDispatcher

__all__ = [
    "EventDispatcher",
]
