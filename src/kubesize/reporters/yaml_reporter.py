import sys

from ruamel.yaml import YAML

from ..models.cli import DisplayOptions
from .base_reporter import BaseReporter, Report, format_report


class YAMLReporter(BaseReporter):
    """Writes the report as YAML to standard output."""

    def report(self, data: Report, options: DisplayOptions):
        yaml = YAML()
        yaml.default_flow_style = False
        yaml.dump(format_report(data, options.units), sys.stdout)
