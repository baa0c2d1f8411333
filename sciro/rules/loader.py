from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from sciro.domain.errors import ConfigurationError
from sciro.rules.models import DetectionRules


def merge_rules(overrides: DetectionRules | Mapping[str, Any] | None) -> DetectionRules:
    """
    Merge caller overrides onto the defaults.

    Raises ConfigurationError if the overrides do not validate.
    """
    if overrides is None:
        return DetectionRules()
    if isinstance(overrides, DetectionRules):
        return overrides

    try:
        return DetectionRules.model_validate(dict(overrides))
    except ValidationError as e:
        raise ConfigurationError(f"Detection rules validation failed:\n{e}") from e


def _extract_yaml(content: str) -> str:
    # Tuning files may be embedded in markdown; prefer the first ```yaml block.
    yaml_lines = []
    in_block = False
    found_block = False

    for line in content.splitlines():
        s_line = line.strip()
        if s_line.startswith("```yaml"):
            in_block = True
            found_block = True
            continue
        if in_block and s_line.startswith("```"):
            break
        if in_block:
            yaml_lines.append(line)

    return "\n".join(yaml_lines) if found_block else content


def load_rules(path: Path) -> DetectionRules:
    """
    Load and validate a detection rules file.
    Raises FileNotFoundError if file missing.
    Raises ConfigurationError if YAML or schema invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    with open(path) as f:
        content = f.read()

    try:
        data = yaml.safe_load(_extract_yaml(content))
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML syntax in rules file: {e}") from e

    # An empty file means "all defaults"; a top-level `rules:` key is optional.
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError("Rules file must contain a mapping")
    if isinstance(data.get("rules"), dict):
        data = data["rules"]

    return merge_rules(data)
