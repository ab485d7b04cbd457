from .todo import Todo
from .dependency import TodoDependency

__all__ = [
    "Todo",
    "TodoDependency",
]
