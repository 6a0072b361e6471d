from typing import Any, Dict, Optional


class InvalidQuery(ValueError):
    """Raised when a query option cannot be parsed or does not fit the entity."""

    def __init__(self, parameter: str, message: str, token: Optional[str] = None) -> None:
        self.parameter = parameter
        self.message = message
        self.token = token
        super().__init__(f"{parameter}: {message}")

    def to_detail(self) -> Dict[str, Any]:
        detail: Dict[str, Any] = {
            "error": "InvalidQuery",
            "parameter": self.parameter,
            "message": self.message,
        }
        if self.token is not None:
            detail["token"] = self.token
        return detail
