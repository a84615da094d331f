"""
Rule-based value validation.

Rules are evaluated in the order given and the first failure wins:

    >>> Validator.validate("", [Rule.required(), Rule.min_length(3)])
    ValidationResult(is_valid=False, message='This field is required.')
    >>> Validator.validate("abc", [])
    ValidationResult(is_valid=True, message=None)
"""

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Pattern, Sequence, Union
from urllib.parse import urlparse

EMAIL_RE = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
YOUTUBE_URL_RE = re.compile(r'^https?://(www\.)?(youtube\.com/watch\?v=|youtu\.be/)[\w-]+')


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    message: Optional[str] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(True)

    @classmethod
    def fail(cls, message: str) -> "ValidationResult":
        return cls(False, message)


class RuleKind(Enum):
    REQUIRED = "required"
    EMAIL = "email"
    URL = "url"
    NUMBER = "number"
    POSITIVE = "positive"
    YOUTUBE = "youtube"
    MIN_LENGTH = "min_length"
    MAX_LENGTH = "max_length"
    PATTERN = "pattern"
    CUSTOM = "custom"


@dataclass(frozen=True)
class Rule:
    """A rule kind plus the parameter that kind needs (length, regex or predicate)."""
    kind: RuleKind
    param: Any = None

    @classmethod
    def required(cls) -> "Rule":
        return cls(RuleKind.REQUIRED)

    @classmethod
    def email(cls) -> "Rule":
        return cls(RuleKind.EMAIL)

    @classmethod
    def url(cls) -> "Rule":
        return cls(RuleKind.URL)

    @classmethod
    def number(cls) -> "Rule":
        return cls(RuleKind.NUMBER)

    @classmethod
    def positive(cls) -> "Rule":
        return cls(RuleKind.POSITIVE)

    @classmethod
    def youtube(cls) -> "Rule":
        return cls(RuleKind.YOUTUBE)

    @classmethod
    def min_length(cls, length: int) -> "Rule":
        return cls(RuleKind.MIN_LENGTH, length)

    @classmethod
    def max_length(cls, length: int) -> "Rule":
        return cls(RuleKind.MAX_LENGTH, length)

    @classmethod
    def pattern(cls, regex: Union[str, Pattern]) -> "Rule":
        return cls(RuleKind.PATTERN, re.compile(regex) if isinstance(regex, str) else regex)

    @classmethod
    def custom(cls, predicate: Callable[[Any], ValidationResult]) -> "Rule":
        return cls(RuleKind.CUSTOM, predicate)


def _to_number(value: Any) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) else number


def _check_required(value: Any, _param: Any) -> ValidationResult:
    if value is None or value == '':
        return ValidationResult.fail("This field is required.")
    return ValidationResult.ok()


def _check_email(value: Any, _param: Any) -> ValidationResult:
    if not isinstance(value, str) or not EMAIL_RE.match(value):
        return ValidationResult.fail("Invalid email address.")
    return ValidationResult.ok()


def _check_url(value: Any, _param: Any) -> ValidationResult:
    parsed = urlparse(value) if isinstance(value, str) else None
    if parsed is None or not parsed.scheme or not parsed.netloc:
        return ValidationResult.fail("Invalid URL.")
    return ValidationResult.ok()


def _check_number(value: Any, _param: Any) -> ValidationResult:
    if _to_number(value) is None:
        return ValidationResult.fail("Must be a number.")
    return ValidationResult.ok()


def _check_positive(value: Any, _param: Any) -> ValidationResult:
    number = _to_number(value)
    if number is None or number <= 0:
        return ValidationResult.fail("Must be a positive number.")
    return ValidationResult.ok()


def _check_youtube(value: Any, _param: Any) -> ValidationResult:
    if not isinstance(value, str) or not YOUTUBE_URL_RE.match(value):
        return ValidationResult.fail("Invalid YouTube URL.")
    return ValidationResult.ok()


def _check_min_length(value: Any, min_length: int) -> ValidationResult:
    if len(value) < min_length:
        return ValidationResult.fail(f"Must be at least {min_length} characters.")
    return ValidationResult.ok()


def _check_max_length(value: Any, max_length: int) -> ValidationResult:
    if len(value) > max_length:
        return ValidationResult.fail(f"Must be at most {max_length} characters.")
    return ValidationResult.ok()


def _check_pattern(value: Any, pattern: Pattern) -> ValidationResult:
    if not isinstance(value, str) or not pattern.search(value):
        return ValidationResult.fail("Invalid format.")
    return ValidationResult.ok()


def _check_custom(value: Any, predicate: Callable[[Any], ValidationResult]) -> ValidationResult:
    return predicate(value)


_CHECKS: Dict[RuleKind, Callable[[Any, Any], ValidationResult]] = {
    RuleKind.REQUIRED: _check_required,
    RuleKind.EMAIL: _check_email,
    RuleKind.URL: _check_url,
    RuleKind.NUMBER: _check_number,
    RuleKind.POSITIVE: _check_positive,
    RuleKind.YOUTUBE: _check_youtube,
    RuleKind.MIN_LENGTH: _check_min_length,
    RuleKind.MAX_LENGTH: _check_max_length,
    RuleKind.PATTERN: _check_pattern,
    RuleKind.CUSTOM: _check_custom,
}


class Validator:
    """Evaluate an ordered list of rules against a single value."""

    @staticmethod
    def validate(value: Any, rules: Sequence[Rule]) -> ValidationResult:
        for rule in rules:
            result = Validator.apply_rule(value, rule)
            if not result.is_valid:
                return result
        return ValidationResult.ok()

    @staticmethod
    def apply_rule(value: Any, rule: Rule) -> ValidationResult:
        return _CHECKS[rule.kind](value, rule.param)
