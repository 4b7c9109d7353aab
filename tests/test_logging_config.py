import logging

from polysym.logging_config import setup_logging


def test_setup_logging(tmp_path):
    log_file = tmp_path / 'run.log'
    logger = setup_logging('debug', str(log_file))
    try:
        assert logger.name == 'polysym'
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2

        logging.getLogger('polysym.shape').info('hello from a module')
        for handler in logger.handlers:
            handler.flush()
        assert 'hello from a module' in log_file.read_text()

        # calling again replaces the handlers
        setup_logging(logging.WARNING)
        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING
    finally:
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)
