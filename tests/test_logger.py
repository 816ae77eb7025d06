"""Tests for the console/file logger."""

from rmIRC.logger import Logger, LogLevel, NullLogger
from rmIRC.logMessages import LOG_POOL_LINE_BLANK, LOG_POOL_LOADED


def test_levels_and_streams(capsys):
    log = Logger(min_level=LogLevel.INFO)
    log.debug("POOL", "hidden")
    log.info("POOL", LOG_POOL_LOADED, count=2, maps=3, directory="rmap")
    log.warning("POOL", LOG_POOL_LINE_BLANK, location="rmap/A.txt", lineno=4)

    out, err = capsys.readouterr()
    assert "hidden" not in out
    assert "[POOL] Loaded 2 map pools (3 maps) from rmap." in out
    assert "[POOL] rmap/A.txt:4 blank line ignored." in err


def test_bad_template_does_not_raise(capsys):
    Logger().error("ERROR", "missing {thing}")
    assert "LOGGER FATAL" in capsys.readouterr().err


def test_file_output(tmp_path):
    path = tmp_path / "bot.log"
    log = Logger(file_path=str(path), min_level=LogLevel.DEBUG)
    log.raw_send("PRIVMSG #rmap :Map: de_dust2")
    log.close()
    assert "[RAW] -> PRIVMSG #rmap :Map: de_dust2" in path.read_text(encoding="utf-8")


def test_null_logger_accepts_everything():
    log = NullLogger()
    log.warning("POOL", LOG_POOL_LINE_BLANK, location="x", lineno=1)
    log.close()
