import pytest
from click.testing import CliRunner

from logranges.config.defaults import CONFIG_ENV_VAR
from logranges_cli.main import cli

APACHE_LOG = (
    '10.0.0.1 - - [10/Oct/2000:13:55:36 -0700] "GET /index.html HTTP/1.0" 200 2326\n'
    '10.0.0.1 - - [10/Oct/2000:13:56:01 -0700] "GET /missing HTTP/1.0" 404 209\n'
    '10.0.0.2 - - [10/Oct/2000:13:57:12 -0700] "GET /gone HTTP/1.0" 404 209\n'
    '10.0.0.2 - - [10/Oct/2000:14:30:00 -0700] "POST /api HTTP/1.0" 500 12\n'
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "no-config.yml"))
    monkeypatch.setenv("NO_RICH_LOGGING", "1")


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def access_log(tmp_path):
    path = tmp_path / "access.log"
    path.write_text(APACHE_LOG)
    return path


def test_scan_file(runner, access_log):
    result = runner.invoke(cli, ["scan", str(access_log), "-p", '" 404 ', "-p", '" 5\\d\\d '])
    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == [
        '2000-10-10 20:56:01 -> 2000-10-10 20:57:12: [" 404 ] 2 matches',
        '2000-10-10 21:30:00 -> 2000-10-10 21:30:00: [" 5\\d\\d ] 1 matches',
    ]


def test_scan_stdin(runner):
    result = runner.invoke(cli, ["scan", "-p", "404"], input=APACHE_LOG)
    assert result.exit_code == 0, result.output
    assert "[404] 2 matches" in result.output


def test_scan_with_explicit_format(runner, tmp_path):
    path = tmp_path / "app.log"
    path.write_text("2019-12-26 17:12:31 +0200 ERROR boom\n")
    result = runner.invoke(cli, ["scan", str(path), "-p", "ERROR", "--format", "%Y-%m-%d %T %z"])
    assert result.exit_code == 0, result.output
    assert "2019-12-26 15:12:31 -> 2019-12-26 15:12:31: [ERROR] 1 matches" in result.output


def test_scan_prints_emoji_codes_in_patterns_verbatim(runner, tmp_path):
    path = tmp_path / "app.log"
    path.write_text("2020-01-01 10:00:00.000 status:100: slow reply\n")
    result = runner.invoke(cli, ["scan", str(path), "-p", "status:100:"])
    assert result.exit_code == 0, result.output
    assert "[status:100:] 1 matches" in result.output


def test_scan_uses_config_file(runner, access_log, tmp_path):
    config = tmp_path / "logranges.yml"
    config.write_text("patterns:\n  - pattern: '\" 404 '\n    name: not-found\n")
    result = runner.invoke(cli, ["scan", str(access_log), "--config", str(config)])
    assert result.exit_code == 0, result.output
    assert "[not-found] 2 matches" in result.output


@pytest.mark.parametrize(
    "args,message",
    [
        (["scan"], "At least one pattern is required"),
        (["scan", "-p", "(["], "Invalid pattern #0"),
        (["scan", "-p", "x", "-f", "%Y %Q"], "Invalid date format"),
    ],
)
def test_scan_configuration_errors(runner, access_log, args, message):
    result = runner.invoke(cli, args[:1] + [str(access_log)] + args[1:])
    assert result.exit_code == 1
    assert message in result.output
    assert "matches" not in result.output


def test_scan_guess_exhausted(runner):
    result = runner.invoke(cli, ["scan", "-p", "x"], input="a\nb\nc\nd\ne\nf\n")
    assert result.exit_code == 1
    assert "--format" in result.output


def test_scan_missing_file(runner, tmp_path):
    result = runner.invoke(cli, ["scan", str(tmp_path / "nope.log"), "-p", "x"])
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_formats_lists_the_library(runner):
    result = runner.invoke(cli, ["formats"])
    assert result.exit_code == 0
    for name in ["tomee", "syslog", "apache", "postgres"]:
        assert name in result.output


def test_guess_command(runner, access_log):
    result = runner.invoke(cli, ["guess", str(access_log)])
    assert result.exit_code == 0
    assert result.output.strip() == "apache: %d/%b/%Y:%T %z"


def test_guess_command_gives_up(runner):
    result = runner.invoke(cli, ["guess", "--attempts", "2"], input="a\nb\nApr 26 10:05:02 x\n")
    assert result.exit_code == 1
    assert "first 2 lines" in result.output


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output
