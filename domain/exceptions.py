from typing import Any


class ArgumentNullException(Exception):
    def __init__(self, argument_name: str, *args: object) -> None:
        super().__init__(
            f"Argument '{argument_name}' cannot be null")

    @classmethod
    def if_none(cls, value: Any, argument_name: str) -> None:
        if value is None:
            raise cls(argument_name)

    @classmethod
    def if_none_or_whitespace(cls, value: Any, argument_name: str) -> None:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise cls(argument_name)


class StorageConfigurationException(Exception):
    def __init__(self, variable: str, *args: object) -> None:
        self.variable = variable
        super().__init__(
            f"Storage configuration is missing required value '{variable}'")
