from loguru import logger

from loudbars.utils.logger import get_logger, setup_logging


def test_setup_logging_writes_to_file_only(tmp_path, capsys):
    log_path = tmp_path / "logs" / "loudbars.log"

    setup_logging(path=log_path)
    try:
        get_logger("tests").info("chart ready")
        get_logger("tests").debug("not at info level")
        logger.complete()
    finally:
        logger.remove()

    text = log_path.read_text(encoding="utf-8")
    assert "chart ready" in text
    assert "not at info level" not in text
    captured = capsys.readouterr()
    assert "chart ready" not in captured.out + captured.err
