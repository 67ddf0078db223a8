"""
Unit tests for the protected process registry.
"""

from sysmonitor.core.protection import ProtectedProcessRegistry


class TestProtectedProcessRegistry:
    """Test protected process matching."""

    def test_exact_name_is_protected(self):
        assert ProtectedProcessRegistry(["sshd"]).is_protected("sshd")

    def test_substring_match(self):
        registry = ProtectedProcessRegistry(["systemd"])
        assert registry.is_protected("systemd-journald")
        assert registry.is_protected("my-systemd-helper")

    def test_match_is_case_sensitive(self):
        registry = ProtectedProcessRegistry(["Xorg"])
        assert not registry.is_protected("xorg")
        assert registry.is_protected("Xorg")

    def test_any_fragment_is_enough(self):
        registry = ProtectedProcessRegistry(["sshd", "postgres"])
        assert registry.is_protected("postgres: writer")
        assert not registry.is_protected("stress")

    def test_unresolvable_name_is_not_protected(self):
        registry = ProtectedProcessRegistry(["sshd"])
        assert not registry.is_protected(None)
        assert not registry.is_protected("")

    def test_empty_fragments_ignored(self):
        registry = ProtectedProcessRegistry(["", "sshd"])
        assert registry.fragments == frozenset({"sshd"})
        assert not registry.is_protected("stress")
