"""Main entry point for the terminal client/task desk."""
import logging
from pathlib import Path
from typing import Optional

import click

from cli import CLI
from config import get_settings
from logging_setup import setup_logging
from user import User

logger = logging.getLogger(__name__)

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.option('--alt-screen/--no-alt-screen', default=None,
              help='Draw on the terminal alternate screen (env: TASKDESK_ALT_SCREEN).')
@click.option('--sample-data/--empty', 'sample_data', default=None,
              help='Start with the demonstration clients and task (env: TASKDESK_SAMPLE_DATA).')
@click.option('--log-level', type=click.Choice(LOG_LEVELS, case_sensitive=False), default=None,
              help='Console log level (env: TASKDESK_LOG_LEVEL).')
@click.option('--log-file', type=click.Path(dir_okay=False), default=None,
              help='Also write DEBUG logs to this file (env: TASKDESK_LOG_FILE).')
def main(alt_screen: Optional[bool], sample_data: Optional[bool],
         log_level: Optional[str], log_file: Optional[str]) -> None:
    """Manage clients and their tasks from the terminal."""
    settings = get_settings().override(
        alt_screen=alt_screen,
        sample_data=sample_data,
        log_level=log_level.upper() if log_level else None,
        log_file=Path(log_file) if log_file else None,
    )
    setup_logging(settings.log_level, settings.log_file)
    user = User.with_sample_data() if settings.sample_data else User()
    logger.info('Starting with %s', user)
    CLI(user, settings).run()


if __name__ == "__main__":
    main()
