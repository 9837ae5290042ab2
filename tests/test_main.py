"""Command line handling."""

import logging

from vaultfall.config.settings import Settings
from vaultfall.main import apply_overrides, build_parser, setup_logging


def test_overrides_apply_only_given_values():
    base = Settings(_env_file=None)
    args = build_parser().parse_args(["--seed", "7", "--width", "320", "--debug"])

    settings = apply_overrides(base, args)

    assert settings.seed == 7
    assert settings.debug is True
    assert settings.display.width == 320
    assert settings.display.height == base.display.height
    assert base.display.width == 400


def test_no_arguments_keep_settings():
    base = Settings(_env_file=None)
    settings = apply_overrides(base, build_parser().parse_args([]))
    assert settings.display == base.display
    assert settings.seed is None


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "vaultfall.log"
    root = logging.getLogger()
    saved = root.handlers[:]
    root.handlers = []
    try:
        setup_logging(debug=True, log_file=str(log_file))
        logging.getLogger("vaultfall.test").info("hello")
        for handler in root.handlers:
            handler.flush()
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers = saved

    assert "hello" in log_file.read_text()
