"""Main entry point for the terminal to-do list."""
import logging

from cli import CLI
from config import load_settings
from logging_setup import setup_logging
from repository import TaskRepository

logger = logging.getLogger(__name__)


def main():
    settings = load_settings()
    try:
        setup_logging(log_dir=settings.log_dir, level=settings.log_level)
    except OSError:
        # no writable log dir: run without logs
        logging.getLogger().addHandler(logging.NullHandler())
    logger.info("starting with task file %s", settings.tasks_file)
    repository = TaskRepository.load(settings.tasks_file)
    cli = CLI(repository, alt_screen=settings.alt_screen)
    cli.run()

if __name__ == "__main__":
    main()
