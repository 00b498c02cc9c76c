"""Named operation registry used by the endpoint modules."""

from typing import Awaitable, Callable, Dict

from enrollment.core.schemas import OperationResult

Handler = Callable[..., Awaitable[OperationResult]]


class Router:
    """Maps operation names to their async handlers."""

    def __init__(self):
        self.operations: Dict[str, Handler] = {}

    def operation(self, name: str) -> Callable[[Handler], Handler]:
        """Register the decorated coroutine under ``name``."""
        def decorator(func: Handler) -> Handler:
            if name in self.operations:
                raise ValueError(f"Operation {name!r} is already registered")
            self.operations[name] = func
            return func
        return decorator

    def include_router(self, router: "Router") -> None:
        """Add every operation of another router."""
        for name, func in router.operations.items():
            self.operation(name)(func)
