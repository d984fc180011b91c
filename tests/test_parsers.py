"""
State loader tests — verify resource pairs are read from each fixture.
"""
import io
import os

import pytest

from tfinventory.config import InventoryConfig
from tfinventory.models.errors import StateFileError

FIXTURES = os.path.join(os.path.dirname(__file__), "fixtures")


# --------------------------------------------------------- Legacy (v3) states
class TestLegacyState:
    def setup_method(self):
        from tfinventory.parsers import state
        self.parser = state

    def test_resource_count(self):
        pairs = self.parser.parse_file(os.path.join(FIXTURES, "legacy.tfstate"))
        assert len(pairs) == 7

    def test_modules_walked_in_order(self):
        keys = [k for k, _ in self.parser.parse_file(os.path.join(FIXTURES, "legacy.tfstate"))]
        assert keys[0] == "aws_instance.web.0"
        assert keys[-1] == "openstack_compute_instance_v2.bastion"

    def test_attributes_are_primary_attributes(self):
        pairs = dict(self.parser.parse_file(os.path.join(FIXTURES, "legacy.tfstate")))
        attrs = pairs["aws_instance.web.0"].attributes
        assert attrs["public_ip"] == "52.1.1.1"
        assert attrs["tags.%"] == "2"


# --------------------------------------------------------- Modern (v4) states
class TestModernState:
    def setup_method(self):
        from tfinventory.parsers import state
        self.parser = state
        self.pairs = dict(state.parse_file(os.path.join(FIXTURES, "modern.tfstate")))

    def test_managed_only(self):
        assert not any(k.startswith("aws_ami") for k in self.pairs)

    def test_keys_use_index(self):
        assert set(self.pairs) == {
            "aws_instance.web.0",
            "aws_instance.web.1",
            "aws_instance.upgraded",
            "google_compute_instance.worker",
        }

    def test_string_index_skipped(self):
        assert "aws_instance.named" not in self.pairs

    def test_nested_attributes_flattened(self):
        attrs = self.pairs["google_compute_instance.worker"].attributes
        assert attrs["network_interface.#"] == "1"
        assert attrs["network_interface.0.access_config.0.nat_ip"] == "35.1.1.1"
        assert attrs["tags.#"] == "2"
        assert attrs["tags.1"] == "GPU"

    def test_maps_counted_with_percent(self):
        attrs = self.pairs["aws_instance.web.0"].attributes
        assert attrs["tags.%"] == "1"
        assert attrs["tags.Name"] == "Web"

    def test_scalars_stringified(self):
        attrs = self.pairs["aws_instance.web.0"].attributes
        assert attrs["ebs_optimized"] == "false"
        assert attrs["ipv6_addresses.#"] == "0"

    def test_null_dropped(self):
        assert "public_ip" not in self.pairs["aws_instance.web.1"].attributes

    def test_flat_attributes_used_as_is(self):
        attrs = self.pairs["aws_instance.upgraded"].attributes
        assert attrs["private_ip"] == "10.0.1.4"
        assert attrs["tags.Name"] == "Old"
        assert "tags.%.%" not in attrs

    def test_flat_attributes_resolve_address(self):
        from tfinventory import inventory
        inv = inventory.build(self.pairs.items())
        assert inv.groups["upgraded"] == ["10.0.1.4"]


# --------------------------------------------------------- Loading
class TestLoading:
    def setup_method(self):
        from tfinventory.parsers import state
        self.parser = state

    def test_missing_file_raises(self):
        with pytest.raises(StateFileError) as info:
            self.parser.parse_file("/nonexistent/terraform.tfstate")
        assert info.value.path == "/nonexistent/terraform.tfstate"

    def test_invalid_json_raises(self, tmp_path):
        bad = tmp_path / "terraform.tfstate"
        bad.write_text("this is not json {{{")
        with pytest.raises(StateFileError):
            self.parser.parse_file(str(bad))

    def test_load_from_stream(self):
        data = self.parser.load_state(io.StringIO('{"version": 4, "resources": []}'))
        assert list(self.parser.iter_resources(data)) == []

    def test_legacy_module_with_resource_list_skipped(self):
        data = {"version": 3, "modules": [{"resources": []}, {"resources": {"aws_instance.a": {}}}]}
        assert [k for k, _ in self.parser.iter_resources(data)] == ["aws_instance.a"]

    def test_unknown_format_yields_nothing(self):
        assert list(self.parser.iter_resources({"foo": 1})) == []

    def test_flatten_top_level(self):
        assert self.parser.flatten({"a": {"b": [1, True]}}) == {
            "a.%": "1",
            "a.b.#": "2",
            "a.b.0": "1",
            "a.b.1": "true",
        }


# --------------------------------------------------------- State path
class TestResolveStatePath:
    def setup_method(self):
        from tfinventory.parsers import state
        self.parser = state

    def test_explicit_path(self):
        assert self.parser.resolve_state_path("x.tfstate", InventoryConfig(state_path="y")) == "x.tfstate"

    def test_env_path(self):
        assert self.parser.resolve_state_path(None, InventoryConfig(state_path="y.tfstate")) == "y.tfstate"

    def test_default_path(self):
        assert self.parser.resolve_state_path(None, InventoryConfig()) == "terraform.tfstate"

    def test_directory(self, tmp_path):
        expected = os.path.join(str(tmp_path), "terraform.tfstate")
        assert self.parser.resolve_state_path(str(tmp_path), InventoryConfig()) == expected

    def test_stdin(self):
        assert self.parser.resolve_state_path("-", InventoryConfig()) == "-"


# --------------------------------------------------------- Format detection
class TestFormatDetection:
    def setup_method(self):
        from tfinventory import detect
        self.detect = detect

    def test_legacy(self):
        assert self.detect.detect_format({"version": 3, "modules": []}) == "legacy"

    def test_modern(self):
        assert self.detect.detect_format({"version": 4, "resources": []}) == "modern"

    def test_modern_without_version(self):
        assert self.detect.detect_format({"resources": []}) == "modern"

    def test_unknown(self):
        assert self.detect.detect_format([]) == "unknown"
        assert self.detect.detect_format({"version": 3}) == "unknown"
