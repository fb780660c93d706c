from typing import Any, Optional

__all__ = (
    "MissingParameterError",
    "ParameterError",
    "ParameterTypeCountMismatchError",
    "ParameterTypeError",
    "SQLExpandError",
)


class SQLExpandError(Exception):
    """Base exception class from which all sqlexpand exceptions inherit."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``SQLExpandError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class ParameterError(SQLExpandError):
    """Issues binding parameters to a statement."""

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "Issues binding parameters to SQL statement."
        super().__init__(message)


class ParameterTypeCountMismatchError(ParameterError):
    """The parameter collection and the type collection differ in length."""

    parameter_count: int
    type_count: int

    def __init__(self, parameter_count: int, type_count: int) -> None:
        self.parameter_count = parameter_count
        self.type_count = type_count
        super().__init__(f"Got {parameter_count} parameters but {type_count} types; the counts must match")


class MissingParameterError(ParameterError, KeyError):
    """A named placeholder has no bound value or no declared type."""


class ParameterTypeError(ParameterError, TypeError):
    """A parameter value does not fit its declared type."""
