"""Plugin args loading for the ControllerSpreadFilter.

Args can come from a plain mapping, from a YAML file holding just the args,
or from a full ``KubeSchedulerConfiguration`` whose profiles carry a
``pluginConfig`` entry for the filter::

    apiVersion: kubescheduler.config.k8s.io/v1
    kind: KubeSchedulerConfiguration
    profiles:
      - schedulerName: controller-spread-scheduler
        pluginConfig:
          - name: ControllerSpreadFilter
            args:
              defaultMinHosts: 3
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from controllerspread.config.validator import validate_args
from controllerspread.constants import DEFAULT_MIN_HOSTS, MIN_HOSTS_ANNOTATION, PLUGIN_NAME
from controllerspread.errors import ConfigValidationError

SCHEDULER_CONFIG_KIND = "KubeSchedulerConfiguration"


@dataclass(frozen=True)
class SpreadFilterArgs:
    """Configuration for the ControllerSpreadFilter."""

    min_hosts_annotation: str = MIN_HOSTS_ANNOTATION
    default_min_hosts: int = DEFAULT_MIN_HOSTS

    def to_dict(self) -> Dict[str, Any]:
        """Serialise to the args mapping."""
        return {
            "minHostsAnnotation": self.min_hosts_annotation,
            "defaultMinHosts": self.default_min_hosts,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SpreadFilterArgs":
        """Validate and deserialise an args mapping. ``None`` gives defaults."""
        data = data or {}
        validate_args(data)
        return cls(
            min_hosts_annotation=data.get("minHostsAnnotation", MIN_HOSTS_ANNOTATION),
            default_min_hosts=data.get("defaultMinHosts", DEFAULT_MIN_HOSTS),
        )


def load_args(config_path: str) -> SpreadFilterArgs:
    """Load plugin args from a YAML file.

    Args:
        config_path: Path to an args file or a scheduler configuration.

    Returns:
        The validated SpreadFilterArgs.

    Raises:
        FileNotFoundError: If the path does not exist.
        ConfigValidationError: If the YAML is malformed or the args are invalid.
    """
    path = Path(config_path)
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        doc = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in {config_path}", [str(e)])

    if doc is None:
        return SpreadFilterArgs()
    if not isinstance(doc, dict):
        raise ConfigValidationError(
            f"Expected a mapping in {config_path}, got {type(doc).__name__}"
        )

    if doc.get("kind") == SCHEDULER_CONFIG_KIND:
        return SpreadFilterArgs.from_dict(extract_plugin_args(doc))
    return SpreadFilterArgs.from_dict(doc)


def extract_plugin_args(scheduler_config: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Find this plugin's args in a KubeSchedulerConfiguration document.

    The first profile carrying a ``pluginConfig`` entry for the filter wins.
    Returns None when no profile configures it.
    """
    for profile in scheduler_config.get("profiles") or []:
        for entry in profile.get("pluginConfig") or []:
            if entry.get("name") == PLUGIN_NAME:
                return entry.get("args") or {}
    return None
