# src/kubesize/reporters/console_reporter.py
"""
A reporter that displays capacity data in a formatted table in the console.

Both reports list one figure per row, so the table stays narrow whatever the
number of figures. Node-role reports add one value column per role.
"""

import logging

from rich.console import Console
from rich.table import Table

from ..models.capacity import CapacityData, NodeRoleCapacityData
from ..models.cli import DisplayOptions
from .base_reporter import FIELDS, BaseReporter, Report, column_header, format_record

logger = logging.getLogger(__name__)


class ConsoleReporter(BaseReporter):
    """
    Renders capacity data to the console using the 'rich' library.
    """

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def report(self, data: Report, options: DisplayOptions):
        if isinstance(data, NodeRoleCapacityData):
            table = self._node_role_table(data, options)
        else:
            table = self._cluster_table(data, options)
        self.console.print(table)

    def _new_table(self, title: str, options: DisplayOptions) -> Table:
        table = Table(
            title=None if options.no_headers else title,
            header_style="bold magenta",
            show_header=not options.no_headers,
        )
        table.add_column("RESOURCE", style="cyan", no_wrap=True)
        return table

    def _cluster_table(self, data: CapacityData, options: DisplayOptions) -> Table:
        table = self._new_table("Cluster Capacity", options)
        table.add_column("VALUE", style="green", justify="right", overflow="fold")

        values = format_record(data, options.units)
        for field, header, kind in FIELDS:
            table.add_row(column_header(header, kind, options.units), str(values[field]))
        return table

    def _node_role_table(self, data: NodeRoleCapacityData, options: DisplayOptions) -> Table:
        """One column per role, in sorted role order."""
        table = self._new_table("Capacity by Node Role", options)
        for role in data.role_names:
            table.add_column(role, style="green", justify="right", overflow="fold")

        if not data.role_names:
            logger.warning("No node roles to report.")
            return table

        # Without a header row the role names lead the table as plain data.
        if options.no_headers:
            table.add_row("", *data.role_names)

        records = [format_record(data.roles[role], options.units) for role in data.role_names]
        for field, header, kind in FIELDS:
            table.add_row(
                column_header(header, kind, options.units),
                *(str(values[field]) for values in records),
            )
        return table
