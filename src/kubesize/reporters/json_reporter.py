import json

import typer

from ..models.cli import DisplayOptions
from .base_reporter import BaseReporter, Report, format_report


class JSONReporter(BaseReporter):
    """Writes the report as JSON to standard output."""

    def report(self, data: Report, options: DisplayOptions):
        content = json.dumps(format_report(data, options.units), ensure_ascii=False, indent=2)
        typer.echo(content)
