"""LogManager 测试"""

import logging

import colorlog

from bootkernel.kernel.logging import (
    LOG_FILE_NAME,
    ROOT_LOGGER,
    LogManager,
    configure_logging,
    get_log_manager,
    get_logger,
)


class TestLogManager:
    """日志管理器"""

    def test_is_shared(self):
        assert get_log_manager() is LogManager()

    def test_console_handler_is_colored(self):
        get_log_manager()
        root = logging.getLogger(ROOT_LOGGER)

        assert any(
            isinstance(handler.formatter, colorlog.ColoredFormatter)
            for handler in root.handlers
        )

    def test_does_not_propagate_to_host_root_logger(self):
        """宿主应用配置了根日志器时不重复输出"""
        get_log_manager()
        records = []

        class Collect(logging.Handler):
            def emit(self, record):
                records.append(record)

        host_handler = Collect()
        logging.getLogger().addHandler(host_handler)
        try:
            get_logger("bootkernel.kernel.app_kernel").warning("only once")
        finally:
            logging.getLogger().removeHandler(host_handler)

        assert logging.getLogger(ROOT_LOGGER).propagate is False
        assert records == []

    def test_get_logger(self):
        logger = get_logger("bootkernel.kernel.app_kernel")

        assert logger.name == "bootkernel.kernel.app_kernel"

    def test_set_level_by_name(self):
        manager = get_log_manager()
        previous = manager.level
        try:
            manager.set_level("warning")
            assert manager.level == logging.WARNING
        finally:
            manager.set_level(previous)

    def test_file_logging(self, tmp_path):
        manager = get_log_manager()
        previous = manager.level
        try:
            configure_logging({"level": "DEBUG", "log_dir": str(tmp_path)})
            get_logger("bootkernel.test").info("written to file")

            assert manager.log_dir == tmp_path
            assert (tmp_path / LOG_FILE_NAME).exists()
        finally:
            root = logging.getLogger(ROOT_LOGGER)
            handler = manager._file_handler
            if handler is not None:
                root.removeHandler(handler)
                handler.close()
                manager._file_handler = None
                manager._log_dir = None
            manager.set_level(previous)
