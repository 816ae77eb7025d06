"""Tests for the command registry."""

from rmIRC.plugin import Plugin
from rmIRC.registry import CommandRegistry


class Named(Plugin):
    def __init__(self, name):
        self.name = name


def test_lookup_exact_match_only():
    registry = CommandRegistry()
    plugin = Named("maps")
    registry.register("rm", plugin)

    assert registry.lookup("rm") is plugin
    assert registry.lookup("RM") is None
    assert registry.lookup("r") is None
    assert registry.lookup("rm ") is None
    assert "rm" in registry


def test_last_registration_wins(logger):
    registry = CommandRegistry(logger)
    first, second = Named("first"), Named("second")
    registry.register("rm", first)
    registry.register("rm", second)

    assert registry.lookup("rm") is second
    assert len(logger.levels("warning")) == 1


def test_reregistering_same_plugin_is_quiet(logger):
    registry = CommandRegistry(logger)
    plugin = Named("maps")
    registry.register("rm", plugin)
    registry.register("rm", plugin)
    assert logger.levels("warning") == []


def test_unregister_plugin():
    registry = CommandRegistry()
    maps, quit_ = Named("maps"), Named("quit")
    registry.register("rm", maps)
    registry.register("pools", maps)
    registry.register("!QUIT", quit_)

    assert sorted(registry.unregister_plugin(maps)) == ["pools", "rm"]
    assert registry.names() == ["!QUIT"]
    assert len(registry) == 1


def test_clear():
    registry = CommandRegistry()
    registry.register("rm", Named("maps"))
    registry.clear()
    assert list(registry) == []
