"""Schema validation for ControllerSpreadFilter plugin args."""

from typing import Any, Dict, List

import jsonschema

from controllerspread.errors import ConfigValidationError

# Annotation key limits: DNS-subdomain prefix (253), the slash, name part (63)
MAX_PREFIX_LENGTH = 253
MAX_NAME_LENGTH = 63

# JSON Schema for the plugin args mapping
ARGS_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "minHostsAnnotation": {
            "type": "string",
            "minLength": 1,
            "maxLength": MAX_PREFIX_LENGTH + 1 + MAX_NAME_LENGTH,
        },
        "defaultMinHosts": {
            "type": "integer",
            "minimum": 2,
        },
    },
}


def validate_args(args: Dict[str, Any]) -> bool:
    """Validate plugin args against the schema.

    Args:
        args: The raw args mapping.

    Returns:
        True if validation passes.

    Raises:
        ConfigValidationError: If validation fails. ``errors`` holds every
            problem found, not only the first.
    """
    validator = jsonschema.Draft202012Validator(ARGS_SCHEMA)
    errors = [_format_error(e) for e in sorted(validator.iter_errors(args), key=str)]
    if errors:
        raise ConfigValidationError("Plugin args validation failed", errors)

    errors = _semantic_validation(args)
    if errors:
        raise ConfigValidationError("Semantic validation failed", errors)

    return True


def _format_error(error: jsonschema.ValidationError) -> str:
    path = ".".join(str(p) for p in error.absolute_path)
    return f"{path}: {error.message}" if path else error.message


def _semantic_validation(args: Dict[str, Any]) -> List[str]:
    """Checks the schema cannot express.

    An annotation key is an optional DNS-subdomain prefix and a name,
    separated by a single slash.
    """
    errors = []

    key = args.get("minHostsAnnotation")
    if key is not None:
        prefix, _, name = key.rpartition("/")
        if key.count("/") > 1 or not name or (key.count("/") == 1 and not prefix):
            errors.append(f"minHostsAnnotation is not a valid annotation key: {key!r}")
        elif len(name) > MAX_NAME_LENGTH:
            errors.append(f"minHostsAnnotation name part exceeds {MAX_NAME_LENGTH} characters: {key!r}")

    return errors
