from loguru import logger

from expense_calculator import logger as logger_module


def test_setup_logger_writes_to_file(tmp_path):
    log_file = tmp_path / 'logs' / 'calculator.log'
    logger_module.setup_logger(level='DEBUG', log_file=str(log_file))

    logger.info('calcul terminé')
    logger.complete()

    assert log_file.exists()
    assert 'calcul terminé' in log_file.read_text(encoding='utf-8')
    logger_module.setup_logger(level='INFO')


def test_ensure_logger_configures_once(monkeypatch):
    calls = []
    monkeypatch.setattr(logger_module, '_CONFIGURED', False)
    monkeypatch.setattr(logger_module, 'setup_logger', lambda: calls.append(1))

    logger_module.ensure_logger()
    monkeypatch.setattr(logger_module, '_CONFIGURED', True)
    logger_module.ensure_logger()

    assert calls == [1]
