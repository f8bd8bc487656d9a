"""Tests for the Flask web application."""

import re

import pytest

from app import _clamp_int, _payload_text

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class TestHelpers:
    """Test request parameter helpers."""

    @pytest.mark.parametrize("raw,expected", [("5", 5), ("abc", 2), (None, 2), ("-1", 2), ("21", 2), ("20", 20)])
    def test_clamp_int(self, raw, expected):
        assert _clamp_int(raw, 2, 0, 20) == expected

    def test_raw_text_wins(self):
        params = {'text': 'HELLO', 'org': 'org-td', 'fio': '', 'amount': '', 'purpose': ''}
        assert _payload_text(params) == 'HELLO'

    def test_payment_text_from_organization(self):
        params = {'text': '', 'org': 'org-sd', 'fio': '', 'amount': '10', 'purpose': 'Взнос'}
        assert _payload_text(params).startswith('ST00012|')


class TestIndex:
    """Test the form page."""

    def test_get(self, client):
        response = client.get('/')
        assert response.status_code == 200
        assert 'QR Payment Generator' in response.get_data(as_text=True)
        assert 'data:image/png;base64,' not in response.get_data(as_text=True)

    def test_post_raw_text(self, client):
        response = client.post('/', data={'text': 'HELLO WORLD', 'ecc': 'Q', 'mask': 'auto'})
        body = response.get_data(as_text=True)
        assert response.status_code == 200
        assert 'data:image/png;base64,' in body
        assert 'version 1 (21x21)' in body
        assert 'best mask' in body

    def test_post_payment(self, client):
        response = client.post('/', data={
            'org': 'org-td', 'fio': 'Иванов Иван', 'sum': '1500', 'purpose': 'Оплата', 'ecc': 'M',
        })
        body = response.get_data(as_text=True)
        assert response.status_code == 200
        assert 'data:image/png;base64,' in body
        assert '/export/png?' in body

    def test_post_nothing(self, client):
        response = client.post('/', data={})
        body = response.get_data(as_text=True)
        assert response.status_code == 200
        assert 'Nothing to encode' in body

    def test_post_data_too_long_for_version(self, client):
        response = client.post('/', data={'text': 'x' * 200, 'version': '1'})
        body = response.get_data(as_text=True)
        assert response.status_code == 200
        assert 'Could not generate the QR code' in body

    def test_changed_amount_is_reencoded(self, client):
        first = client.post('/', data={'org': 'org-sd', 'sum': '100', 'purpose': 'X'})
        body = first.get_data(as_text=True)
        assert 'Sum=10000' in body
        textarea = re.search(r'<textarea name="text"[^>]*>(.*?)</textarea>', body, re.S).group(1)
        assert 'ST00012' not in textarea

        second = client.post('/', data={'org': 'org-sd', 'sum': '250', 'purpose': 'X',
                                          'text': textarea})
        body = second.get_data(as_text=True)
        assert 'Sum=25000' in body
        assert 'Sum=10000' not in body

    def test_post_invalid_amount(self, client):
        response = client.post('/', data={'org': 'org-td', 'sum': 'abc'})
        assert response.status_code == 200
        assert 'Could not generate the QR code' in response.get_data(as_text=True)


class TestExport:
    """Test file downloads."""

    def test_png(self, client):
        response = client.get('/export/png?text=HELLO')
        assert response.status_code == 200
        assert response.mimetype == 'image/png'
        assert response.data.startswith(PNG_SIGNATURE)

    def test_svg(self, client):
        response = client.get('/export/svg?text=HELLO&border=1&scale=3')
        assert response.status_code == 200
        assert response.mimetype == 'image/svg+xml'
        assert response.data.startswith(b'<?xml')
        assert b'width="69"' in response.data

    def test_png_payment_with_caption(self, client):
        response = client.get('/export/png', query_string={'org': 'org-sd', 'sum': '100'})
        assert response.status_code == 200
        assert response.data.startswith(PNG_SIGNATURE)

    @pytest.mark.parametrize("query", ['', '?text=HELLO&mask=9', '?text=HELLO&ecc=Z'])
    def test_bad_request(self, client, query):
        assert client.get('/export/png' + query).status_code == 400
        assert client.get('/export/svg' + query).status_code == 400
