import logging
import os
from pathlib import Path

from src.rules.models import Rules

logger = logging.getLogger(__name__)


def validate_ops_rules(rules: Rules, data_dir: Path) -> None:
    """
    Validate operational requirements before startup.

    Raises RuntimeError listing every problem found.
    """
    problems: list[str] = []

    missing = [env_var for env_var in rules.ops.required_env if env_var not in os.environ]
    if missing:
        problems.append(f"Missing required environment variables: {', '.join(missing)}")

    try:
        data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        problems.append(f"Data directory {data_dir} is not usable: {e}")
    else:
        if not os.access(data_dir, os.W_OK):
            problems.append(f"Data directory {data_dir} is not writable")

    if problems:
        raise RuntimeError("; ".join(problems))

    logger.info("Configuration validated (data dir %s).", data_dir)
