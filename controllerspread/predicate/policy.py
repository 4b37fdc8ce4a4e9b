"""Minimum-hosts policy derived from controller annotations.

The ``controller-spread-scheduler/min-hosts`` annotation on a controller
overrides how many distinct nodes its pods must span. The override only ever
relaxes the requirement below the desired count; it can never push it above.

    desired  override  required
    2        1 (->2)   2
    3        2         2
    5        3         3
    4        9         4
"""

import re
import sys
from dataclasses import dataclass
from typing import Mapping, Optional

from controllerspread.constants import DEFAULT_MIN_HOSTS, MIN_HOSTS_ANNOTATION

_INTEGER = re.compile(r"[+-]?[0-9]+")
_MAX_DIGITS = 18


@dataclass(frozen=True)
class SpreadPolicy:
    """Effective spread requirement for one controller."""

    desired_count: int
    min_hosts: int
    required_hosts: int

    @property
    def enforced(self) -> bool:
        """Spreading a single replica is meaningless."""
        return self.desired_count > 1


def parse_min_hosts(value: Optional[str], default: int = DEFAULT_MIN_HOSTS) -> int:
    """Parse a min-hosts annotation value.

    Accepts only base-10 integers of at least 2. Anything else, including
    ``None``, values below 2 and non-numeric strings, yields ``default``.
    """
    if value is None or not _INTEGER.fullmatch(value):
        return default
    if value.startswith("-"):
        return default
    digits = value.lstrip("+").lstrip("0")
    if len(digits) > _MAX_DIGITS:
        # Larger than any replica count; only ever used as min(desired, value).
        return sys.maxsize
    parsed = int(digits or "0")
    if parsed < 2:
        return default
    return parsed


def resolve_spread_policy(
    desired_count: int,
    annotations: Optional[Mapping[str, str]],
    annotation_key: str = MIN_HOSTS_ANNOTATION,
    default_min_hosts: int = DEFAULT_MIN_HOSTS,
) -> SpreadPolicy:
    """Combine a controller's desired count with its min-hosts override."""
    raw = (annotations or {}).get(annotation_key)
    min_hosts = parse_min_hosts(raw, default_min_hosts)
    return SpreadPolicy(
        desired_count=desired_count,
        min_hosts=min_hosts,
        required_hosts=min(desired_count, min_hosts),
    )
