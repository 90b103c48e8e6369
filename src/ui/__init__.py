from .timer_bar import TimerBar

__all__ = ["TimerBar"]
