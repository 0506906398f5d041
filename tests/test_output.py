import pytest

from compiler_builder.output import LoggingType, OutputIn, log, write


@pytest.mark.parametrize(
    "ltype, expected_out, expected_err",
    [
        (LoggingType.ERROR, "", "ERROR message"),
        (LoggingType.DEBUG, "DEBUG message", ""),
    ],
)
def test_log_prefixes_message_with_its_tag(capsys, ltype, expected_out, expected_err):
    log(ltype, "message")
    captured = capsys.readouterr()
    assert captured.out == expected_out
    assert captured.err == expected_err


def test_write_stdout(capsys):
    write(OutputIn.STDOUT, "hello\n")
    captured = capsys.readouterr()
    assert captured.out == "hello\n"
    assert captured.err == ""


def test_write_stderr(capsys):
    write(OutputIn.STDERR, "oops")
    captured = capsys.readouterr()
    assert captured.err == "oops"
    assert captured.out == ""


def test_error_goes_to_stderr_and_returns(capsys):
    log(LoggingType.ERROR, "tar is not installed.\n")
    captured = capsys.readouterr()
    assert captured.err == "ERROR tar is not installed.\n"
    assert captured.out == ""


def test_debug_goes_to_stdout(capsys):
    log(LoggingType.DEBUG, "step")
    captured = capsys.readouterr()
    assert captured.out == "DEBUG step"
    assert captured.err == ""


def test_panic_writes_and_exits(capsys):
    with pytest.raises(SystemExit) as excinfo:
        log(LoggingType.PANIC, "Requirements aren't ok!\n\n")
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert captured.err == "PANIC Requirements aren't ok!\n\n"
    assert captured.out == ""