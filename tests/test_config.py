"""Tests for plugin args loading and validation."""

import pytest

from controllerspread.config.loader import SpreadFilterArgs, extract_plugin_args, load_args
from controllerspread.config.validator import validate_args
from controllerspread.errors import ConfigValidationError
from controllerspread.predicate.policy import MIN_HOSTS_ANNOTATION


class TestValidateArgs:
    """Tests for args schema validation."""

    def test_empty_args_valid(self):
        assert validate_args({}) is True

    def test_full_args_valid(self):
        assert validate_args({"minHostsAnnotation": "example.com/spread", "defaultMinHosts": 4})

    def test_unprefixed_annotation_valid(self):
        assert validate_args({"minHostsAnnotation": "min-hosts"})

    def test_default_below_two(self):
        with pytest.raises(ConfigValidationError) as exc_info:
            validate_args({"defaultMinHosts": 1})
        assert any("defaultMinHosts" in e for e in exc_info.value.errors)

    def test_wrong_type(self):
        with pytest.raises(ConfigValidationError):
            validate_args({"defaultMinHosts": "3"})

    def test_unknown_key(self):
        with pytest.raises(ConfigValidationError) as exc_info:
            validate_args({"minHosts": 3})
        assert "minHosts" in exc_info.value.errors[0]

    def test_all_errors_reported(self):
        with pytest.raises(ConfigValidationError) as exc_info:
            validate_args({"defaultMinHosts": 0, "minHostsAnnotation": "", "extra": True})
        assert len(exc_info.value.errors) == 3

    def test_longest_annotation_key_valid(self):
        assert validate_args({"minHostsAnnotation": "p" * 253 + "/" + "n" * 63})

    def test_annotation_key_too_long(self):
        with pytest.raises(ConfigValidationError) as exc_info:
            validate_args({"minHostsAnnotation": "p" * 254 + "/" + "n" * 63})
        assert any("minHostsAnnotation" in e for e in exc_info.value.errors)

    @pytest.mark.parametrize("key", ["a/b/c", "/name", "prefix/", "x/" + "n" * 64])
    def test_malformed_annotation_key(self, key):
        with pytest.raises(ConfigValidationError, match="Semantic"):
            validate_args({"minHostsAnnotation": key})


class TestSpreadFilterArgs:
    """Tests for args (de)serialisation."""

    def test_defaults(self):
        args = SpreadFilterArgs()
        assert args.min_hosts_annotation == MIN_HOSTS_ANNOTATION
        assert args.default_min_hosts == 2

    def test_from_none(self):
        assert SpreadFilterArgs.from_dict(None) == SpreadFilterArgs()

    def test_from_dict(self):
        args = SpreadFilterArgs.from_dict({"defaultMinHosts": 5})
        assert args.default_min_hosts == 5
        assert args.min_hosts_annotation == MIN_HOSTS_ANNOTATION

    def test_to_dict(self):
        assert SpreadFilterArgs().to_dict() == {
            "minHostsAnnotation": "controller-spread-scheduler/min-hosts",
            "defaultMinHosts": 2,
        }


class TestLoadArgs:
    """Tests for loading args from YAML files."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_args(str(tmp_path / "absent.yaml"))

    def test_bare_args_file(self, tmp_path):
        path = tmp_path / "args.yaml"
        path.write_text("defaultMinHosts: 4\n")
        assert load_args(str(path)).default_min_hosts == 4

    def test_empty_file(self, tmp_path):
        path = tmp_path / "args.yaml"
        path.write_text("")
        assert load_args(str(path)) == SpreadFilterArgs()

    def test_scheduler_configuration(self, tmp_path, scheduler_config_yaml):
        path = tmp_path / "scheduler.yaml"
        path.write_text(scheduler_config_yaml)
        assert load_args(str(path)).default_min_hosts == 3

    def test_scheduler_configuration_without_plugin(self, tmp_path):
        path = tmp_path / "scheduler.yaml"
        path.write_text(
            "apiVersion: kubescheduler.config.k8s.io/v1\n"
            "kind: KubeSchedulerConfiguration\n"
            "profiles:\n"
            "  - schedulerName: default-scheduler\n"
        )
        assert load_args(str(path)) == SpreadFilterArgs()

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("defaultMinHosts: [3\n")
        with pytest.raises(ConfigValidationError, match="Invalid YAML"):
            load_args(str(path))

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigValidationError, match="Expected a mapping"):
            load_args(str(path))

    def test_invalid_args(self, tmp_path):
        path = tmp_path / "args.yaml"
        path.write_text("defaultMinHosts: 1\n")
        with pytest.raises(ConfigValidationError):
            load_args(str(path))


class TestExtractPluginArgs:
    """Tests for locating plugin args in a scheduler configuration."""

    def test_first_matching_profile(self):
        config = {
            "profiles": [
                {"pluginConfig": [{"name": "ControllerSpreadFilter", "args": {"defaultMinHosts": 3}}]},
                {"pluginConfig": [{"name": "ControllerSpreadFilter", "args": {"defaultMinHosts": 9}}]},
            ]
        }
        assert extract_plugin_args(config) == {"defaultMinHosts": 3}

    def test_entry_without_args(self):
        config = {"profiles": [{"pluginConfig": [{"name": "ControllerSpreadFilter"}]}]}
        assert extract_plugin_args(config) == {}

    def test_no_profiles(self):
        assert extract_plugin_args({}) is None
