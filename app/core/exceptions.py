from typing import Any, Optional


class ProjectionInputError(ValueError):
    """
    Raised when a projection is requested with inputs the engine cannot simulate.

    Attributes:
        field: Name of the offending ProjectionInput field (camelCase).
        constraint: Short description of the violated rule (e.g. "must be >= 0").
        value: The rejected value, if any.
        loc_prefix: Location of the input in an HTTP request body, used when reporting.
    """

    def __init__(self, field: str, constraint: str, value: Optional[Any] = None):
        self.field = field
        self.constraint = constraint
        self.value = value
        self.loc_prefix = ("body",)

        message = f"Invalid projection input: {field} {constraint}"
        if value is not None:
            message += f" (got {value!r})"
        super().__init__(message)

    def to_error_detail(self) -> dict:
        """Error entry shaped like FastAPI's own validation errors."""
        return {
            "loc": [*self.loc_prefix, self.field],
            "msg": f"{self.field} {self.constraint}",
            "type": "projection_input",
        }
