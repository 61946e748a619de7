from __future__ import annotations


class FieldMetaError(Exception):
    exit_code = 1


class ConfigurationError(FieldMetaError):
    exit_code = 2


class InvalidSelection(ConfigurationError):
    pass


class InvalidFieldID(FieldMetaError):
    exit_code = 2

    def __init__(self, value: str) -> None:
        super().__init__(f"Specified ID value '{value}' is invalid")
        self.value = value


class TransportError(FieldMetaError):
    exit_code = 3


class MalformedResponse(FieldMetaError):
    exit_code = 4


class FieldNotFound(FieldMetaError):
    exit_code = 1

    def __init__(self, by: str, value: str) -> None:
        if by == "name":
            message = f"Specified field '{value}' not found"
        else:
            message = f"Specified ID value '{value}' not found"
        super().__init__(message)
        self.by = by
        self.value = value
