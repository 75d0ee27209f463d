import sys, pathlib
sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

import logging

import logging_config


def test_get_logger_configures_once(monkeypatch, tmp_path):
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    monkeypatch.setattr(logging_config, "_LOG_CONFIGURED", False)
    log_file = tmp_path / "logs" / "app.log"
    try:
        log = logging_config.get_logger("recipes.test", {"file": str(log_file), "level": "warning"})
        logging_config.get_logger("recipes.other", {"file": str(tmp_path / "ignored.log")})
        added = [h for h in root.handlers if h not in before]
        assert len(added) == 2
        log.info("hello from test")
        for h in added:
            h.flush()
        assert "hello from test" in log_file.read_text(encoding="utf-8")
        assert not (tmp_path / "ignored.log").exists()
        stream = [h for h in added if not isinstance(h, logging.FileHandler)][0]
        assert stream.level == logging.WARNING
    finally:
        for h in list(root.handlers):
            if h not in before:
                root.removeHandler(h)
                h.close()
        root.setLevel(level)
