"""
Tests for access code and session id generation
"""

import re

from wifi_portal.services.code_generator import generate_access_code, generate_session_id

ACCESS_CODE_RE = re.compile(r'^WIFI-[A-Z0-9]{6}$')


class TestAccessCode:
    def test_format(self):
        for _ in range(500):
            assert ACCESS_CODE_RE.match(generate_access_code())

    def test_codes_vary(self):
        codes = {generate_access_code() for _ in range(50)}
        assert len(codes) > 1


class TestSessionId:
    def test_starts_with_epoch_millis(self):
        millis, suffix = generate_session_id().split("-")
        assert millis.isdigit()
        assert len(millis) >= 13
        assert re.match(r'^[0-9a-z]{5}$', suffix)
