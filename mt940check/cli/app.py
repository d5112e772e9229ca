"""Cyclopts application and command routing for the mt940check CLI.

The CLI provides the following commands:
- validate: Validate one JSON statement payload
- batch: Validate many payloads
- list-rules: Show the configured rules per section
- check-config: Validate configuration files
"""

from cyclopts import App

from mt940check import __version__
from mt940check.cli import commands

app = App(
    name="mt940check",
    help="SWIFT MT940 statement payload validator",
    version=__version__,
)

app.command(commands.validate)
app.command(commands.batch)
app.command(commands.list_rules, name="list-rules")
app.command(commands.check_config, name="check-config")
