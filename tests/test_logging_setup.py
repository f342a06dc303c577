import logging

import pytest

from logging_setup import setup_logging


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        if h not in handlers:
            h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


def test_setup_logging_writes_to_file(tmp_path, restore_root_logger):
    log_file = setup_logging(log_dir=tmp_path / 'logs', level='DEBUG')
    logging.getLogger('repository').warning('could not save tasks to %s', 'x.json')
    for h in logging.getLogger().handlers:
        h.flush()
    assert log_file == tmp_path / 'logs' / 'todo.log'
    text = log_file.read_text(encoding='utf-8')
    assert 'WARNING repository: could not save tasks to x.json' in text


def test_setup_logging_twice_keeps_one_handler(tmp_path, restore_root_logger):
    setup_logging(log_dir=tmp_path)
    setup_logging(log_dir=tmp_path)
    assert len(logging.getLogger().handlers) == 1
