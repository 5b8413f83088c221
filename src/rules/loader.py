import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from src.domain.state import LifecycleConfig
from src.rules.models import Rules

logger = logging.getLogger(__name__)


def load_rules(path: Path) -> Rules:
    """
    Load and validate the rules file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if the YAML or its schema is invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    with open(path) as f:
        content = f.read()

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e

    try:
        rules = Rules.model_validate(data)
    except ValidationError as e:
        # Re-raise with a clear message for the caller/logs
        raise ValueError(f"Rules validation failed:\n{e}") from e

    logger.debug("Loaded rules %s from %s", rules.project.rules_version, path)
    return rules


def lifecycle_config(rules: Rules) -> LifecycleConfig:
    """Lifecycle limits and defaults from the content rules."""
    return LifecycleConfig(
        title_min=rules.content.title.min,
        title_max=rules.content.title.max,
        excerpt_min=rules.content.excerpt.min,
        excerpt_max=rules.content.excerpt.max,
        slug_pattern=rules.content.slug.pattern,
        default_category=rules.content.default_category,
    )
