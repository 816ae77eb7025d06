"""Tests for the plugin dispatcher."""

import sys
import types

import pytest

from rmIRC.dispatch import Dispatcher
from rmIRC.plugin import Plugin
from rmIRC.types.message import Message, Responses


class FakeBot:
    def __init__(self, logger, nick="rmapbot"):
        self.logger = logger
        self.nick = nick


class Echo(Plugin):
    def __init__(self, name, commands=(), events=(), lines=1):
        self.name = name
        self.commands = commands
        self.events = events
        self.lines = lines
        self.seen = []
        self.inits = 0
        self.closes = 0

    def init(self, bot):
        super().init(bot)
        self.inits += 1

    def close(self):
        self.closes += 1

    async def respond(self, ctx):
        self.seen.append((ctx.author, ctx.command_name, ctx.arg))
        out = Responses()
        for i in range(self.lines):
            out.add(ctx.reply(f"{self.name} {i}"))
        return out


class Broken(Plugin):
    name = "broken"
    commands = ("rm",)

    async def respond(self, ctx):
        raise RuntimeError("boom")


def privmsg(text, nick="alice", target="#rmap"):
    return Message.parse(f":{nick}!u@h PRIVMSG {target} :{text}")


@pytest.fixture
def dispatcher(logger):
    return Dispatcher(FakeBot(logger))


class TestDispatch:
    @pytest.mark.asyncio
    async def test_routes_command_with_argument(self, dispatcher):
        echo = Echo("maps", commands=("rm",))
        dispatcher.add_plugin(echo)

        responses = await dispatcher.dispatch(privmsg("rm 2"))

        assert echo.seen == [("alice", "rm", "2")]
        assert [r.format() for r in responses] == ["PRIVMSG #rmap :maps 0"]

    @pytest.mark.asyncio
    async def test_unknown_command_produces_nothing(self, dispatcher):
        echo = Echo("maps", commands=("rm",))
        dispatcher.add_plugin(echo)
        assert await dispatcher.dispatch(privmsg("rmx")) == []
        assert await dispatcher.dispatch(privmsg("hello rm")) == []
        assert echo.seen == []

    @pytest.mark.asyncio
    async def test_private_message_replies_to_author(self, dispatcher):
        dispatcher.add_plugin(Echo("maps", commands=("pools",)))
        responses = await dispatcher.dispatch(privmsg("pools", target="rmapbot"))
        assert responses[0].target == "alice"

    @pytest.mark.asyncio
    async def test_event_and_command_both_run(self, dispatcher):
        watcher = Echo("watcher", events=("PRIVMSG",))
        maps = Echo("maps", commands=("rm",))
        dispatcher.add_plugin(watcher)
        dispatcher.add_plugin(maps)

        responses = await dispatcher.dispatch(privmsg("rm"))

        assert [r.text for r in responses] == ["watcher 0", "maps 0"]
        assert len(watcher.seen) == 1 and len(maps.seen) == 1

    @pytest.mark.asyncio
    async def test_plugin_matching_twice_runs_once(self, dispatcher):
        both = Echo("both", commands=("rm",), events=("PRIVMSG",))
        dispatcher.add_plugin(both)
        await dispatcher.dispatch(privmsg("rm"))
        assert len(both.seen) == 1

    @pytest.mark.asyncio
    async def test_failing_plugin_does_not_stop_others(self, dispatcher, logger):
        watcher = Echo("watcher", events=("PRIVMSG",))
        dispatcher.add_plugin(Broken())
        dispatcher.add_plugin(watcher)

        responses = await dispatcher.dispatch(privmsg("rm"))

        assert [r.text for r in responses] == ["watcher 0"]
        assert any("boom" in str(r[3].get("error")) for r in logger.levels("error"))

    @pytest.mark.asyncio
    async def test_responses_capped(self, logger):
        dispatcher = Dispatcher(FakeBot(logger), max_responses=3)
        dispatcher.add_plugin(Echo("chatty", commands=("rm",), lines=5))

        responses = await dispatcher.dispatch(privmsg("rm"))

        assert len(responses) == 3
        assert logger.levels("warning")

    @pytest.mark.asyncio
    async def test_prefix_required_when_set(self, logger):
        dispatcher = Dispatcher(FakeBot(logger), prefix="!")
        echo = Echo("maps", commands=("rm",))
        dispatcher.add_plugin(echo)

        assert await dispatcher.dispatch(privmsg("rm")) == []
        assert len(await dispatcher.dispatch(privmsg("!rm 1"))) == 1
        assert echo.seen == [("alice", "rm", "1")]

    @pytest.mark.asyncio
    async def test_empty_message_ignored(self, dispatcher):
        dispatcher.add_plugin(Echo("all", events=("",)))
        assert await dispatcher.dispatch(Message.parse("")) == []


class TestPluginLifecycle:
    def test_duplicate_name_rejected(self, dispatcher):
        assert dispatcher.add_plugin(Echo("maps", commands=("rm",))) is True
        assert dispatcher.add_plugin(Echo("maps", commands=("pools",))) is False
        assert "pools" not in dispatcher.commands

    def test_init_failure_leaves_plugin_out(self, dispatcher):
        class Failing(Echo):
            def init(self, bot):
                raise OSError("no pools")

        with pytest.raises(OSError):
            dispatcher.add_plugin(Failing("maps", commands=("rm",)))
        assert "maps" not in dispatcher.plugins
        assert "rm" not in dispatcher.commands

    def test_unload(self, dispatcher):
        echo = Echo("maps", commands=("rm", "pools"), events=("NOTICE",))
        dispatcher.add_plugin(echo)

        assert dispatcher.unload_plugin("maps") is True
        assert echo.closes == 1
        assert len(dispatcher.commands) == 0
        assert len(dispatcher.events) == 0
        assert dispatcher.unload_plugin("maps") is False

    def test_rebuild(self, dispatcher):
        echo = Echo("maps", commands=("rm",))
        dispatcher.add_plugin(echo)
        echo.commands = ("rm", "pools")

        dispatcher.rebuild()

        assert echo.closes == 1
        assert echo.inits == 2
        assert dispatcher.commands.lookup("pools") is echo

    def test_load_module(self, dispatcher, monkeypatch):
        module = types.ModuleType("rmirc_test_plugin")
        module.setup = lambda bot: Echo("from module", commands=("hi",))
        monkeypatch.setitem(sys.modules, "rmirc_test_plugin", module)

        plugin = dispatcher.load_module("rmirc_test_plugin")

        assert dispatcher.commands.lookup("hi") is plugin
        assert dispatcher.modules["from module"] == "rmirc_test_plugin"

    def test_load_module_without_setup(self, dispatcher, monkeypatch):
        monkeypatch.setitem(sys.modules, "rmirc_empty_plugin", types.ModuleType("rmirc_empty_plugin"))
        with pytest.raises(ImportError):
            dispatcher.load_module("rmirc_empty_plugin")
