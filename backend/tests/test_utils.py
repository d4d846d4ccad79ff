"""
Tests for response formatting, event parsing and the handler wrapper.
"""
import json
from decimal import Decimal

import pytest

from shared.errors import InvalidInput, NotFound
from shared.utils import api_handler, format_response, parse_body, to_int, get_query_param


class TestFormatResponse:

    def test_decimals_serialized(self):
        response = format_response(200, {'coins': Decimal('15'), 'amount': Decimal('12.5')})

        assert json.loads(response['body']) == {'coins': 15, 'amount': 12.5}
        assert response['headers']['Access-Control-Allow-Origin'] == '*'


class TestParsing:

    def test_invalid_json_is_empty(self):
        assert parse_body({'body': '{not json'}) == {}

    def test_missing_body_is_empty(self):
        assert parse_body({'body': None}) == {}

    def test_floats_become_decimal(self):
        assert parse_body({'body': '{"price": 9.99}'}) == {'price': Decimal('9.99')}

    def test_query_params_may_be_null(self):
        assert get_query_param({'queryStringParameters': None}, 'email', 'x') == 'x'

    @pytest.mark.parametrize('value,expected', [(5, 5), ('7', 7), (Decimal('3'), 3), (2.0, 2)])
    def test_to_int(self, value, expected):
        assert to_int(value, 'n') == expected

    @pytest.mark.parametrize('value', [None, '', 'abc', 1.5, True, 'NaN'])
    def test_to_int_rejects(self, value):
        with pytest.raises(InvalidInput):
            to_int(value, 'n')


class TestApiHandler:

    def test_api_error_mapped(self):
        @api_handler
        def handler(event, context):
            raise NotFound('Task not found.')

        response = handler({}, None)

        assert response['statusCode'] == 404
        assert json.loads(response['body']) == {'message': 'Task not found.'}

    def test_unexpected_error_is_500(self):
        @api_handler
        def handler(event, context):
            raise RuntimeError('boom')

        response = handler({}, None)

        assert response['statusCode'] == 500
        assert json.loads(response['body']) == {'message': 'Internal Server Error'}


class TestHealth:

    def test_running(self):
        from handlers.health import handler

        response = handler({}, None)

        assert response['statusCode'] == 200
        assert json.loads(response['body']) == {'message': 'Earnly is running'}
