"""Names and defaults shared across the filter and its configuration."""

# Name the filter registers under with the scheduling framework
PLUGIN_NAME = "ControllerSpreadFilter"

# Annotation on the controller object overriding the minimum distinct hosts
MIN_HOSTS_ANNOTATION = "controller-spread-scheduler/min-hosts"

# Minimum distinct hosts when the annotation is absent or invalid
DEFAULT_MIN_HOSTS = 2
