"""Shared tail of every composition operation."""

import logging
from typing import Optional

from ..executor.command_builder import CommandBuilder
from ..executor.process_manager import ProcessManager

logger = logging.getLogger("ffcompose")


def run_command(
    builder: CommandBuilder,
    output: str,
    dry_run: bool = False,
    manager: Optional[ProcessManager] = None,
) -> str:
    """Execute the built command and return ``output``, or the command text on dry run."""
    manager = manager or ProcessManager()
    command = builder.build()
    if dry_run:
        return manager.execute(command, dry_run=True)

    manager.execute(command)
    logger.info("Wrote %s", output)
    return output
