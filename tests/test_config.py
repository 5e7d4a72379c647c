from miniftp.utils.config import Config


def test_log_level_is_normalized():
    assert Config(log_level=' debug ').log_level == 'DEBUG'


def test_unknown_log_level_falls_back_to_info():
    assert Config(log_level='verbose').log_level == 'INFO'
