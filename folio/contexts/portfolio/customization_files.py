"""
Customization files.

Loads flat field-name -> value mappings from YAML for command-line rendering
and bulk customization. Scalars are converted to strings so the result can be
passed straight to the render engine.

Example customizations.yaml:
    heading: Jane Doe
    accent_color: "#0ea5e9"
    show_projects: true
"""

from pathlib import Path
from typing import Any, Dict

from omegaconf import OmegaConf


def _to_field_value(field_name: str, value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ValueError(
        f"Customization '{field_name}' must be a scalar value, got {type(value).__name__}"
    )


def load_customizations(config_path: Path) -> Dict[str, str]:
    """
    Load a YAML customization file as a flat mapping of strings.

    Args:
        config_path: Path to YAML file with one field per top-level key

    Returns:
        Dict mapping field names to string values (file order preserved)

    Raises:
        ValueError: If the file is not a mapping or holds nested values
    """
    config = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)

    if not isinstance(config, dict):
        raise ValueError(f"Customization file must contain a mapping: {config_path}")

    return {str(key): _to_field_value(str(key), value) for key, value in config.items()}
