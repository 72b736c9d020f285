from loguru import logger

import nearcade.core.logging as app_logging
import nearcade.main as app_main


def test_app_imports_with_real_logging_config():
    paths = {route.path for route in app_main.app.routes}
    assert "/discover/t/{token:path}" in paths
    assert "/shops" in paths
    assert app_logging.LOG_DIR.is_dir()


def test_file_sink_receives_records():
    logger.info("nearcade logging smoke record")
    logger.complete()  # enqueue=True 큐 비우기
    log_file = app_logging.LOG_DIR / "app.log"
    assert log_file.exists()
    assert "nearcade logging smoke record" in log_file.read_text(encoding="utf-8")
