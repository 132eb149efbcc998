from loguru import logger

from fittrack.core.config import Settings
from fittrack.core.logger import setup_logger


def test_file_sink_follows_settings(tmp_path):
    config = Settings(log_level="WARNING", log_file=str(tmp_path / "logs" / "fittrack.log"))
    path = setup_logger(config)
    logger.info("quiet")
    logger.warning("route sealed twice")
    # back to stderr only; closes the file sink
    setup_logger(Settings(log_file=""))

    text = path.read_text()
    assert "route sealed twice" in text
    assert "quiet" not in text


def test_no_file_sink_without_log_file():
    assert setup_logger(Settings(log_file="")) is None
