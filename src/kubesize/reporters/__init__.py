"""Reporters that render capacity reports as table, JSON or YAML."""

from .base_reporter import BaseReporter
from .console_reporter import ConsoleReporter
from .json_reporter import JSONReporter
from .yaml_reporter import YAMLReporter

_REPORTERS = {
    "table": ConsoleReporter,
    "json": JSONReporter,
    "yaml": YAMLReporter,
}


def get_reporter(output: str) -> BaseReporter:
    """Returns a reporter for the validated output format."""
    try:
        return _REPORTERS[output]()
    except KeyError:
        raise ValueError(f"Invalid output format '{output}'.") from None


__all__ = ["BaseReporter", "ConsoleReporter", "JSONReporter", "YAMLReporter", "get_reporter"]
