import pytest

from emerald.log import client_logger, core_logger, init_logging


@pytest.fixture(autouse=True)
def reset_loggers():
    yield
    for logger in (core_logger(), client_logger()):
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.propagate = True


def test_logger_names():
    assert core_logger().name == "Emerald"
    assert client_logger().name == "APP"


def test_file_format_has_level_and_name(tmp_path, capsys):
    path = tmp_path / "Emerald.log"
    init_logging(path)
    core_logger().info("hello core")
    client_logger().warning("hello client")
    text = path.read_text(encoding="utf-8")
    assert "[INFO] Emerald: hello core" in text
    assert "[WARNING] APP: hello client" in text


def test_console_output(tmp_path, capsys):
    init_logging(tmp_path / "Emerald.log")
    core_logger().error("console line")
    out = capsys.readouterr().out
    assert "Emerald: console line" in out
    assert "[ERROR]" not in out


def test_debug_messages_are_kept(tmp_path, capsys):
    path = tmp_path / "Emerald.log"
    init_logging(path)
    core_logger().debug("trace detail")
    assert "trace detail" in path.read_text(encoding="utf-8")


def test_reinit_replaces_handlers_and_truncates(tmp_path, capsys):
    path = tmp_path / "Emerald.log"
    init_logging(path)
    core_logger().info("first run")
    init_logging(path)
    core_logger().info("second run")
    text = path.read_text(encoding="utf-8")
    assert "first run" not in text
    assert text.count("second run") == 1
    assert len(core_logger().handlers) == 2
    assert len(client_logger().handlers) == 2


def test_loggers_do_not_propagate(tmp_path, capsys):
    init_logging(tmp_path / "Emerald.log")
    assert core_logger().propagate is False
    assert client_logger().propagate is False