from minishell.state import current_status, record_status


def test_record_returns_code():
    assert record_status(130) == 130


def test_current_reflects_last_record():
    record_status(1)
    record_status(127)
    assert current_status() == 127


def test_record_zero():
    record_status(255)
    record_status(0)
    assert current_status() == 0