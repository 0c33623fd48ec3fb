import math
from abc import ABC, abstractmethod
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Generic, Tuple, TypeVar

from tracker.domain import CategoryDefinition

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')


class Maybe(Generic[T], ABC):

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_some(self) -> bool:
        pass

    def is_none(self) -> bool:
        return not self.is_some()


class Some(Maybe[T]):

    def __init__(self, value: T):
        self._value = value

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_some(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Some({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Some) and self._value == other._value


class Nothing(Maybe[T]):

    def get_or_else(self, default: T) -> T:
        return default

    def is_some(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Nothing()"

    def __eq__(self, other) -> bool:
        return isinstance(other, Nothing)


class Either(Generic[E, T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        pass

    @abstractmethod
    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_right(self) -> bool:
        pass

    def is_left(self) -> bool:
        return not self.is_right()

    @abstractmethod
    def get_error(self) -> E:
        pass


class Right(Either[E, T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return Right(f(self._value))

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_right(self) -> bool:
        return True

    def get_error(self) -> E:
        raise ValueError("Cannot get error from Right")

    def __repr__(self) -> str:
        return f"Right({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Right) and self._value == other._value


class Left(Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return Left(self._error)

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return Left(self._error)

    def get_or_else(self, default: T) -> T:
        return default

    def is_right(self) -> bool:
        return False

    def get_error(self) -> E:
        return self._error

    def __repr__(self) -> str:
        return f"Left({self._error!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Left) and self._error == other._error


class ValidationError(ValueError):
    """Raised when an expense cannot be added to the ledger.

    ``code`` is one of ``invalid_amount``, ``category_not_found`` or
    ``invalid_date``; ``details`` holds the offending input.
    """

    def __init__(self, code: str, message: str, details: dict | None = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    @classmethod
    def from_error(cls, error: dict) -> 'ValidationError':
        details = {k: v for k, v in error.items() if k not in ("error", "message")}
        return cls(error["error"], error["message"], details)


def safe_category(cats: tuple[CategoryDefinition, ...], key: str) -> Maybe[CategoryDefinition]:
    for cat in cats:
        if cat.key == key:
            return Some(cat)
    return Nothing()


def parse_amount(value: Any) -> Either[dict, float]:
    # bool is an int subclass; True must not become an amount of 1
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal, str)):
        return Left({
            "error": "invalid_amount",
            "message": f"Amount must be a number, got {type(value).__name__}",
            "amount": value,
        })

    try:
        amount = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, OverflowError):
        return Left({
            "error": "invalid_amount",
            "message": f"Amount {value!r} is not a representable number",
            "amount": value,
        })

    if not math.isfinite(amount) or amount <= 0:
        return Left({
            "error": "invalid_amount",
            "message": f"Amount must be a finite positive number, got {value!r}",
            "amount": value,
        })
    return Right(amount)


def parse_date(value: Any) -> Either[dict, date]:
    if isinstance(value, datetime):
        # aware datetimes land on the local calendar day
        return Right(value.astimezone().date() if value.tzinfo else value.date())
    if isinstance(value, date):
        return Right(value)
    if isinstance(value, str):
        try:
            return Right(date.fromisoformat(value.strip()))
        except ValueError:
            pass
    return Left({
        "error": "invalid_date",
        "message": f"Date {value!r} is not a valid calendar date (expected YYYY-MM-DD)",
        "date": value,
    })


def validate_expense(
    amount: Any,
    category: str,
    when: Any,
    cats: tuple[CategoryDefinition, ...],
) -> Either[dict, Tuple[float, CategoryDefinition, date]]:
    """Check raw form input and return the normalized (amount, category, date)."""
    category_def = safe_category(cats, category)
    if category_def.is_none():
        return Left({
            "error": "category_not_found",
            "message": f"Category {category!r} does not exist",
            "category": category,
        })

    return parse_amount(amount).bind(
        lambda a: parse_date(when).map(
            lambda d: (a, category_def.get_or_else(None), d)
        )
    )
