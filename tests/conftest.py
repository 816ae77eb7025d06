"""Shared fixtures for rmIRC tests."""

import random

import pytest

from rmIRC.irc import Bot, IRCConnection
from rmIRC.pools import PoolStore


class RecordingLogger:
    """Logger stand-in that keeps (level, prefix, template, kwargs) records."""

    def __init__(self):
        self.records = []

    def _record(self, level, prefix_key, log_constant, **kwargs):
        self.records.append((level, prefix_key, log_constant, kwargs))

    def debug(self, *args, **kwargs):
        self._record("debug", *args, **kwargs)

    def info(self, *args, **kwargs):
        self._record("info", *args, **kwargs)

    def warning(self, *args, **kwargs):
        self._record("warning", *args, **kwargs)

    def error(self, *args, **kwargs):
        self._record("error", *args, **kwargs)

    def raw_recv(self, line):
        pass

    def raw_send(self, message):
        pass

    def close(self):
        pass

    def levels(self, level):
        return [r for r in self.records if r[0] == level]


@pytest.fixture
def logger():
    return RecordingLogger()


@pytest.fixture
def pool_dir(tmp_path):
    """Factory writing {filename: text} into a fresh pool directory."""

    def make(files):
        directory = tmp_path / "rmap"
        directory.mkdir(exist_ok=True)
        for name, text in files.items():
            (directory / name).write_text(text, encoding="utf-8")
        return str(directory)

    return make


@pytest.fixture
def example_dir(pool_dir):
    return pool_dir({"A.txt": "de_dust2\n", "B.txt": "de_mirage\nde_inferno\n"})


@pytest.fixture
def make_bot(logger):
    """Factory for an unconnected Bot with the default plugins loaded."""

    def make(directory, owner="brandonw", prefix="", seed=1234, plugins=None):
        conn = IRCConnection("127.0.0.1", 6667, logger)
        store = PoolStore(directory, logger=logger, rng=random.Random(seed))
        bot = Bot(conn, "rmapbot", "rmapbot", "random map pool bot",
                  prefix=prefix, owner=owner, pools=store)
        if plugins is None:
            bot.load_plugins()
        else:
            bot.load_plugins(plugins)
        return bot

    return make
