from click.testing import CliRunner

from miniftp.main import cli


def test_parse_wire_command():
    result = CliRunner().invoke(cli, ['parse', 'mget a,b, c'])

    assert result.exit_code == 0
    assert "MultiGet(names=('a', 'b', 'c'))" in result.output
    assert "b'mget a, b, c\\x00'" in result.output


def test_parse_client_only_command():
    result = CliRunner().invoke(cli, ['parse', 'open 127.0.0.1 25000'])

    assert result.exit_code == 0
    assert "IPv4Address('127.0.0.1')" in result.output
    assert 'open:' in result.output


def test_parse_error_exit_code():
    result = CliRunner().invoke(cli, ['parse', 'frobnicate x'])

    assert result.exit_code == 1
    assert 'frobnicate' in result.output


def test_interactive_reprompts_after_errors():
    result = CliRunner().invoke(cli, ['interactive'], input='frobnicate x\nuser alice extra\nuser alice\ndir\nquit\n')

    assert result.exit_code == 0
    assert 'unknown command' in result.output
    assert 'trailing characters' in result.output
    assert 'Нет соединения' in result.output
    assert 'не реализована' in result.output
    assert result.output.rstrip().endswith('Quit')


def test_interactive_eof_quits():
    result = CliRunner().invoke(cli, ['interactive'], input='\n')

    assert result.exit_code == 0
    assert 'Quit' in result.output


def test_interactive_survives_huge_port():
    result = CliRunner().invoke(cli, ['interactive'], input='open 127.0.0.1 ' + '9' * 5000 + '\nquit\n')

    assert result.exit_code == 0
    assert 'out of range' in result.output
    assert result.output.rstrip().endswith('Quit')
