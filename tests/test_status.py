import pytest

from smolrtsp.status import Method, StatusCode


@pytest.mark.parametrize(
    "number, name",
    [(200, "OK"), (454, "SESSION_NOT_FOUND"), (500, "INTERNAL_SERVER_ERROR")],
)
def test_status_code_values_match_protocol(number, name):
    code = StatusCode(number)
    assert code.name == name
    assert int(code) == number


def test_status_code_lookup_by_number():
    assert StatusCode(405) is StatusCode.METHOD_NOT_ALLOWED
    assert StatusCode(551) is StatusCode.OPTION_NOT_SUPPORTED


def test_unknown_status_code_rejected():
    with pytest.raises(ValueError):
        StatusCode(999)


def test_method_string_form():
    assert str(Method("PLAY")) == "PLAY"
    assert Method("GET_PARAMETER") == "GET_PARAMETER"


def test_method_lookup_by_name():
    assert Method("TEARDOWN") is Method.TEARDOWN


@pytest.mark.parametrize("method", list(Method))
def test_method_value_equals_member_name(method):
    assert Method(method.name) is method