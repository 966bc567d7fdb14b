from __future__ import annotations

import logging

from metascan.logging import configure_logging, get_logger


def test_child_loggers_share_the_metascan_hierarchy() -> None:
    assert get_logger().name == "metascan"
    assert get_logger("backends.mongoose").name == "metascan.backends.mongoose"


def test_levels_follow_flags() -> None:
    assert configure_logging().level == logging.INFO
    assert configure_logging(verbose=True).level == logging.DEBUG
    assert configure_logging(quiet=True).level == logging.WARNING


def test_reconfiguring_replaces_handlers(tmp_path) -> None:
    configure_logging()
    logger = configure_logging(log_file=tmp_path / "run.log")

    assert len(logger.handlers) == 2
    assert len(configure_logging().handlers) == 1
