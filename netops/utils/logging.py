import logging
from typing import Any, Dict, Union


def setup_logging(level: Union[int, str] = logging.WARNING):
    # Set up logging
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def log_run_summary(command: str, metrics: Dict[str, Any]):
    """Log the summary metrics of a command run."""
    logger = logging.getLogger(__name__)
    logger.info(f"{command} summary: {metrics}")
