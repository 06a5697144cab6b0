from pathlib import Path

import yaml
from pydantic import ValidationError

from tokenkit.rules.models import Rules


def _strip_fences(content: str) -> str:
    # Take the first ```yaml block if the file is markdown-wrapped
    block: list[str] = []
    in_block = False
    for line in content.splitlines():
        stripped = line.strip()
        if stripped.startswith("```yaml"):
            in_block = True
            continue
        if in_block and stripped.startswith("```"):
            return "\n".join(block)
        if in_block:
            block.append(line)
    return "\n".join(block) if in_block else content


def load_rules(path: Path) -> Rules:
    """
    Load and validate the rules file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if YAML or schema invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    content = _strip_fences(path.read_text())

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e

    try:
        return Rules.model_validate(data or {})
    except ValidationError as e:
        raise ValueError(f"Rules validation failed:\n{e}") from e


def default_rules() -> Rules:
    """Built-in defaults, used when no rules file is supplied."""
    return Rules()
