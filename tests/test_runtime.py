"""Tests for runtime compatibility checks."""

import platform
from datetime import date

import pytest

from selfcheck.core import runtime
from selfcheck.core.errors import MissingExtension, ObsoleteRuntime
from selfcheck.core.models import ExtensionRequirement
from selfcheck.core.runtime import (
    check_extensions,
    check_version,
    has_reached_eol,
    list_extension_requirements,
    lookup_eol,
    missing_extensions,
)


class TestCheckVersion:
    """Tests for check_version."""

    @pytest.mark.parametrize("actual", ["3.10.4", "3.11", "3.12.0", "4.0"])
    def test_supported(self, actual):
        assert check_version("3.10", actual) is True

    def test_supported_three_components(self):
        assert check_version("5.3", "5.4.32") is True

    def test_equal_is_supported(self):
        assert check_version("3.10", "3.10.0") is True

    @pytest.mark.parametrize("actual", ["5.1.0", "5.2"])
    def test_obsolete(self, actual):
        with pytest.raises(ObsoleteRuntime, match="Your Python version is obsolete"):
            check_version("5.3", actual)

    def test_numeric_not_lexical(self):
        """3.9 is older than 3.10."""
        with pytest.raises(ObsoleteRuntime):
            check_version("3.10", "3.9.18")

    def test_message_names_versions(self):
        with pytest.raises(ObsoleteRuntime) as exc:
            check_version("3.10", "3.8.0")
        assert "3.8.0" in str(exc.value)
        assert "3.10" in str(exc.value)

    def test_defaults_to_running_interpreter(self):
        assert check_version("3.0") is True
        with pytest.raises(ObsoleteRuntime):
            check_version("99.0")

    def test_invalid_minimum(self):
        with pytest.raises(ValueError):
            check_version("three", platform.python_version())


class TestExtensionRequirements:
    """Tests for the extension catalog."""

    def test_catalog_size(self):
        assert len(list_extension_requirements()) == 8

    def test_first_entry(self):
        assert list_extension_requirements()[0] == ExtensionRequirement(
            name='json', required=True, description='Configuration parsing', loaded=True,
        )

    def test_order_is_stable(self):
        first = [ext.name for ext in list_extension_requirements()]
        second = [ext.name for ext in list_extension_requirements()]
        assert first == second

    def test_required_stdlib_extensions_are_loaded(self):
        assert missing_extensions() == []
        assert check_extensions() is True

    def test_unknown_module_not_loaded(self, monkeypatch):
        monkeypatch.setattr(runtime, 'EXTENSIONS',
                            [('json', True, 'Configuration parsing'),
                             ('no_such_module_xyz', True, 'Nothing')])
        reqs = list_extension_requirements()
        assert [ext.loaded for ext in reqs] == [True, False]
        assert [ext.name for ext in missing_extensions(reqs)] == ['no_such_module_xyz']
        with pytest.raises(MissingExtension, match="no_such_module_xyz"):
            check_extensions()

    def test_missing_optional_is_not_fatal(self):
        reqs = [ExtensionRequirement('ldap3', False, 'Login using LDAP server', False)]
        assert missing_extensions(reqs) == []


class TestLookupEol:
    """Tests for lookup_eol / has_reached_eol."""

    def test_known_version(self):
        assert lookup_eol("3.8.18") == "2024-10-07"

    def test_known_two_component(self):
        assert lookup_eol("3.12") == "2028-10-31"

    def test_prefix_is_major_minor(self):
        """3.1x must not match the 3.1 line or vice versa."""
        assert lookup_eol("3.10.1") == "2026-10-31"

    def test_unknown_version(self):
        today = date.today()
        assert lookup_eol("7.51.34") == f"{today.year + 2}{today.strftime('-%m-%d')}"

    def test_unknown_version_fixed_date(self):
        assert lookup_eol("7.51.34", today=date(2025, 3, 14)) == "2027-03-14"

    def test_unknown_on_leap_day(self):
        assert lookup_eol("7.51.34", today=date(2024, 2, 29)) == "2026-02-28"

    def test_garbage_version(self):
        assert lookup_eol("dev", today=date(2025, 1, 1)) == "2027-01-01"

    def test_reached_eol(self):
        assert has_reached_eol("3.7.9", today=date(2024, 1, 1)) is True
        assert has_reached_eol("3.12.1", today=date(2024, 1, 1)) is False

    def test_unknown_never_reached(self):
        assert has_reached_eol("7.51.34", today=date(2024, 1, 1)) is False
