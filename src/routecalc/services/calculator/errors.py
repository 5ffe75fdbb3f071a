"""Validation errors raised by the route calculator."""

from __future__ import annotations


class RouteCalculatorError(ValueError):
    """Base class for recoverable calculator input errors."""

    code = "route_calculator_error"
    default_message = "La ruta no es válida."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_detail(self) -> dict:
        return {"code": self.code, "message": self.message}


class UnknownStopError(RouteCalculatorError):
    code = "unknown_stop"

    def __init__(self, stop_id: str) -> None:
        self.stop_id = stop_id
        super().__init__(f"Posición desconocida: {stop_id}")


class EmptyRouteError(RouteCalculatorError):
    code = "empty_route"
    default_message = "Añade al menos una posición a la ruta."


class ZeroOrdersError(RouteCalculatorError):
    code = "zero_orders"
    default_message = "Introduce al menos una orden."


class StopIndexError(RouteCalculatorError, IndexError):
    code = "stop_index"

    def __init__(self, index: int, route_length: int) -> None:
        self.index = index
        self.route_length = route_length
        super().__init__(f"No existe la parada {index} en una ruta de {route_length} paradas.")


class SessionNotFoundError(LookupError):
    """Raised when a session id is not registered in the store."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"Session '{session_id}' not found.")
