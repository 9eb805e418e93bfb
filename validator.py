"""Name validation shared by users, folders and files."""

import re

from errors import InvalidNameError

NAME_MIN_LENGTH = 1
NAME_MAX_LENGTH = 50
NAME_PATTERN = r"[A-Za-z0-9_-]+"


class LengthValidator:
    def __init__(self, min_length: int, max_length: int):
        self.min_length = min_length
        self.max_length = max_length

    def validate(self, value: str) -> bool:
        return self.min_length <= len(value) <= self.max_length


class PatternValidator:
    """Passes when the whole value matches pattern."""

    def __init__(self, pattern: str):
        self.pattern = re.compile(pattern)

    def validate(self, value: str) -> bool:
        return self.pattern.fullmatch(value) is not None


class NameValidator:
    """Passes only if every component validator passes."""

    def __init__(self, *validators):
        self.validators = validators

    def validate(self, value: str) -> bool:
        return all(v.validate(value) for v in self.validators)


DEFAULT_VALIDATOR = NameValidator(
    LengthValidator(NAME_MIN_LENGTH, NAME_MAX_LENGTH),
    PatternValidator(NAME_PATTERN),
)


def validate_name(name: str, kind: str = "name") -> None:
    """Raise InvalidNameError if name is not a valid user, folder or file name."""
    if not DEFAULT_VALIDATOR.validate(name):
        raise InvalidNameError(
            f"the {kind} '{name}' is invalid: use {NAME_MIN_LENGTH}-{NAME_MAX_LENGTH} "
            f"letters, digits, '_' or '-'"
        )
