import copy
import logging

import pytest

from cexclient.core.errors import MissingRequiredParameter
from cexclient.core.params import check_parameters, create_query_string, to_json_body, validate_parameters


class TestCreateQueryString:

    def test_simple(self):
        assert create_query_string({"argument": "response"}) == "?argument=response"

    def test_complex_list_is_comma_joined_before_encoding(self):
        params = {"argument": "response", "list": ["string", 516, "test", 23], "lastParam": 12}
        assert create_query_string(params) == "?argument=response&list=string%2C516%2Ctest%2C23&lastParam=12"

    def test_empty(self):
        assert create_query_string({}) == ""
        assert create_query_string(None) == ""

    def test_single_pair(self):
        assert create_query_string({"a": "b"}) == "?a=b"

    def test_encodes_like_encode_uri_component(self):
        params = {"q k": "a&b=c/d", "safe": "-_.!~*'()", "uni": "ä"}
        assert create_query_string(params) == "?q%20k=a%26b%3Dc%2Fd&safe=-_.!~*'()&uni=%C3%A4"

    def test_scalars(self):
        params = {"t": True, "f": False, "n": None, "fl": 12.0, "fr": 1.5}
        assert create_query_string(params) == "?t=true&f=false&n=null&fl=12&fr=1.5"

    def test_nested_dict_is_compact_json(self):
        assert create_query_string({"o": {"a": 1}}) == "?o=%7B%22a%22%3A1%7D"

    def test_keeps_insertion_order_and_does_not_mutate(self):
        params = {"z": 1, "a": [1, 2]}
        before = copy.deepcopy(params)
        first = create_query_string(params)
        assert first == "?z=1&a=1%2C2"
        assert create_query_string(params) == first
        assert params == before


class TestCheckParameters:

    def test_empty_map_and_params(self):
        assert check_parameters({}, []) is None

    def test_missing_optional(self):
        assert check_parameters({}, [{"key": "param"}]) is None

    def test_missing_required(self):
        msg = check_parameters({}, [{"key": "param", "required": True}])
        assert msg == "You are missing the following required parameters: param."

    def test_unused_only_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="cexclient.core.params"):
            assert check_parameters({"param": "test"}, []) is None
        assert "questionable parameters that may be unused: param." in caplog.text

    def test_valid_with_empty_object_value(self):
        params = {"param": "test", "object": {}}
        param_map = [
            {"key": "param", "required": True},
            {"key": "object", "required": True},
            {"key": "non"},
        ]
        assert check_parameters(params, param_map) is None

    def test_missing_listed_in_map_order(self):
        param_map = [{"key": "b", "required": True}, {"key": "a", "required": True}]
        assert check_parameters({}, param_map) == "You are missing the following required parameters: b, a."

    @pytest.mark.parametrize("value", [0, "", None, False, float("nan")])
    def test_falsy_required_value_counts_as_missing(self, value):
        assert check_parameters({"n": value}, [{"key": "n", "required": True}]) is not None

    def test_falsy_switch_off_keeps_zero(self):
        param_map = [{"key": "n", "required": True}]
        assert check_parameters({"n": 0}, param_map, treat_falsy_as_missing=False) is None
        assert check_parameters({"n": None}, param_map, treat_falsy_as_missing=False) is not None

    def test_none_inputs(self):
        assert check_parameters(None, None) is None

    def test_does_not_mutate(self):
        params = {"param": "x", "extra": [1]}
        before = copy.deepcopy(params)
        check_parameters(params, [{"key": "param", "required": True}])
        assert params == before


def test_validate_parameters_raises_with_missing_keys():
    with pytest.raises(MissingRequiredParameter) as ei:
        validate_parameters({"a": "1"}, [{"key": "a", "required": True}, {"key": "symbol", "required": True}])
    assert ei.value.missing == ["symbol"]
    assert "symbol" in str(ei.value)


def test_to_json_body_is_compact():
    assert to_json_body({"a": "b", "n": 1}) == '{"a":"b","n":1}'
    assert to_json_body(None) == "{}"
