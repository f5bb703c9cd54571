import pytest

from portclear.errors import InvalidInput
from portclear.models import Options, PortSpec, ProcessMatch, Result


@pytest.mark.parametrize("port", [1, 80, "3000", " 8080 ", 65535])
def test_valid_ports(port):
    assert 1 <= PortSpec.parse(port).port <= 65535


@pytest.mark.parametrize(
    "port", [0, -1, 65536, "0", "abc", "30x", "", "3.5", 3.5, None, True, [3000]]
)
def test_invalid_ports(port):
    with pytest.raises(InvalidInput, match="Invalid port number"):
        PortSpec.parse(port)


@pytest.mark.parametrize("method", ["http", "TCP", "", None])
def test_invalid_methods(method):
    with pytest.raises(InvalidInput, match="Invalid method"):
        PortSpec.parse(3000, method)


def test_invalid_input_is_a_value_error():
    with pytest.raises(ValueError):
        PortSpec.parse(70000)


def test_options_defaults():
    opts = Options.coerce(None)
    assert opts == Options(method="tcp", list=False, tree=False, strict=False)


def test_options_string_shorthand():
    assert Options.coerce("udp") == Options.coerce({"method": "udp"}) == Options(method="udp")


def test_options_mapping_keeps_defaults():
    opts = Options.coerce({"list": True})
    assert opts.method == "tcp"
    assert opts.list is True
    assert opts.tree is False


def test_options_rejects_unknown_keys_and_methods():
    with pytest.raises(InvalidInput, match="force"):
        Options.coerce({"force": True})
    with pytest.raises(InvalidInput):
        Options.coerce("sctp")
    with pytest.raises(InvalidInput):
        Options.coerce(42)


def test_process_match_from_pids():
    match = ProcessMatch.from_pids([7, 3, 7, 9], name="python")
    assert match == ProcessMatch(pid=7, pids=(7, 3, 9), name="python")
    assert ProcessMatch.from_pids([]) is None


def test_result_to_dict_omits_absent_fields():
    result = Result(port=3000, killed=False, platform="linux", already_free=True)
    assert result.to_dict() == {
        "port": 3000,
        "killed": False,
        "platform": "linux",
        "already_free": True,
    }


@pytest.mark.parametrize(
    "options", [{"list": "no"}, {"tree": 1}, {"strict": None}, Options(list="yes")]
)
def test_options_flags_must_be_booleans(options):
    with pytest.raises(InvalidInput, match="true or false"):
        Options.coerce(options)
