import pytest

from rgis.cli import DEFAULT_MSAA, Values, run


def test_default_sample_count():
    assert run([]) == Values(msaa_sample_count=int(DEFAULT_MSAA))


def test_explicit_sample_count():
    assert run(["--msaa-sample-count", "8"]).msaa_sample_count == 8


@pytest.mark.parametrize("value", ["-1", "abc", "4294967296"])
def test_invalid_sample_count_exits(value):
    with pytest.raises(SystemExit) as excinfo:
        run(["--msaa-sample-count", value])
    assert excinfo.value.code == 2


def test_unknown_argument_exits():
    with pytest.raises(SystemExit) as excinfo:
        run(["--bogus"])
    assert excinfo.value.code == 2