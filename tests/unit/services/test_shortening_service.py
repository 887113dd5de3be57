"""Unit tests for the ShortLinkService

Test coverage includes:

1. Expiry parsing
   - Accepts positive integers and ASCII integer strings, rejects the rest.
   - Out-of-range values are rejected instead of reaching the store.

2. Create
   - Validates url and expiry before touching the store.
   - Stores custom codes as-is and generates codes otherwise.
   - Collision retries check the store and give up with CodeExhaustedError.
   - Store failures propagate.

3. Resolve / describe / remove
   - Missing codes raise NotFoundError without reading or deleting.
   - A link vanishing between the existence check and the read surfaces as StoreReadError.

4. End-to-end behavior against a stateful Redis
   - Round trip, overwrite, expiry and delete-then-resolve.
"""

import re
from datetime import datetime, UTC
from typing import cast
from unittest.mock import MagicMock, patch

import pytest
from freezegun import freeze_time

from localshortener.constants import TTL
from localshortener.dao.base import KeyValueBaseDAO
from localshortener.dao.exceptions import StoreReadError, StoreWriteError
from localshortener.exceptions import CodeExhaustedError, NotFoundError, RandomSourceError, ValidationError
from localshortener.models import ShortLinkModel
from localshortener.services import ShortLinkService, parse_expiry
from localshortener.utils.shortener import ALPHABET


@pytest.fixture
def dao() -> KeyValueBaseDAO:
    _dao = MagicMock(spec=KeyValueBaseDAO)
    _dao.exists.return_value = False
    return cast(KeyValueBaseDAO, _dao)


@pytest.fixture
def service(dao) -> ShortLinkService:
    return ShortLinkService(dao, code_length=6)


# -------------------------------
# 1. Expiry parsing
# -------------------------------


@pytest.mark.parametrize('expiry, expected', [(None, 0), ('', 0), ('1', 1), ('+15', 15), (60, 60)])
def test_parse_expiry(expiry, expected):
    assert parse_expiry(expiry) == expected


@pytest.mark.parametrize(
    'expiry, message',
    [
        ('abc', 'expiry must be a number'),
        ('1.5', 'expiry must be a number'),
        (' 5', 'expiry must be a number'),
        (True, 'expiry must be a number'),
        (2.0, 'expiry must be a number'),
        ('\u0665', 'expiry must be a number'),
        ('9' * 5000, 'expiry must be a number'),
        ('99999999999999999999', 'expiry must be a number'),
        (str(TTL.MAX_MINUTES + 1), 'expiry must be a number'),
        (TTL.MAX_MINUTES + 1, 'expiry must be a number'),
        ('-1', 'expiry must be greater than 0'),
        ('0', 'expiry must be greater than 0'),
        (0, 'expiry must be greater than 0'),
    ],
)
def test_parse_invalid_expiry(expiry, message):
    with pytest.raises(ValidationError, match=re.escape(message)):
        parse_expiry(expiry)


def test_parse_largest_expiry():
    assert parse_expiry(str(TTL.MAX_MINUTES)) == TTL.MAX_MINUTES


# -------------------------------
# 2. Create
# -------------------------------


def test_create_requires_url(service, dao):
    with pytest.raises(ValidationError, match='url required'):
        service.create('')
    dao.set.assert_not_called()


def test_create_rejects_invalid_expiry_before_storing(service, dao):
    with pytest.raises(ValidationError):
        service.create('https://x.com', expiry='abc')
    dao.set.assert_not_called()


def test_create_with_custom_code(service, dao):
    code = service.create('https://example.com', custom_code='abc', expiry='10')

    assert code == 'abc'
    dao.set.assert_called_once_with('abc', 'https://example.com', 10)


def test_create_generates_code(service, dao):
    code = service.create('https://example.com')

    assert len(code) == 6
    assert set(code) <= set(ALPHABET)
    dao.set.assert_called_once_with(code, 'https://example.com', 0)


def test_create_generates_configured_length(dao):
    code = ShortLinkService(dao, code_length=10).create('https://example.com')
    assert len(code) == 10


def test_create_is_collision_blind_by_default(service, dao):
    dao.exists.return_value = True
    service.create('https://example.com')
    dao.exists.assert_not_called()


def test_create_retries_taken_codes(dao):
    dao.exists.side_effect = [True, True, False]
    service = ShortLinkService(dao, collision_retries=3)

    with patch('localshortener.services.shortening_service.generate_shortcode', side_effect=['aaaaaa', 'bbbbbb', 'cccccc']):
        code = service.create('https://example.com')

    assert code == 'cccccc'
    assert dao.exists.call_count == 3
    dao.set.assert_called_once_with('cccccc', 'https://example.com', 0)


def test_create_gives_up_when_codes_are_exhausted(dao):
    dao.exists.return_value = True
    service = ShortLinkService(dao, collision_retries=2)

    with pytest.raises(CodeExhaustedError, match='after 3 attempts'):
        service.create('https://example.com')
    assert dao.exists.call_count == 3
    dao.set.assert_not_called()


def test_create_random_source_failure(service, dao):
    with patch('localshortener.services.shortening_service.generate_shortcode', side_effect=RandomSourceError('no entropy')):
        with pytest.raises(RandomSourceError):
            service.create('https://example.com')
    dao.set.assert_not_called()


def test_create_store_failure(service, dao):
    dao.set.side_effect = StoreWriteError('commit failed')
    with pytest.raises(StoreWriteError):
        service.create('https://example.com', custom_code='abc')


@pytest.mark.parametrize('kwargs', [{'code_length': 0}, {'collision_retries': -1}])
def test_invalid_service_parameters(dao, kwargs):
    with pytest.raises(ValueError):
        ShortLinkService(dao, **kwargs)


# -------------------------------
# 3. Resolve / describe / remove
# -------------------------------


def test_resolve(service, dao):
    dao.exists.return_value = True
    dao.get.return_value = 'https://example.com'

    assert service.resolve('abc') == 'https://example.com'


def test_resolve_missing_code(service, dao):
    with pytest.raises(NotFoundError, match="Short link with code 'abc' not found."):
        service.resolve('abc')
    dao.get.assert_not_called()


def test_resolve_race_with_delete(service, dao):
    dao.exists.return_value = True
    dao.get.side_effect = StoreReadError("Key 'abc' not found.")

    with pytest.raises(StoreReadError):
        service.resolve('abc')


@freeze_time('2025-10-15 12:00:00')
def test_describe(service, dao):
    dao.exists.return_value = True
    dao.get.return_value = 'https://example.com'
    dao.ttl.return_value = 120

    assert service.describe('abc') == ShortLinkModel(
        code='abc',
        target='https://example.com',
        expires_at=datetime(2025, 10, 15, 12, 2, 0, tzinfo=UTC),
    )


def test_describe_permanent_link(service, dao):
    dao.exists.return_value = True
    dao.get.return_value = 'https://example.com'
    dao.ttl.return_value = None

    assert service.describe('abc').expires_at is None


def test_remove(service, dao):
    dao.exists.return_value = True
    service.remove('abc')
    dao.delete.assert_called_once_with('abc')


def test_remove_missing_code(service, dao):
    with pytest.raises(NotFoundError):
        service.remove('abc')
    dao.delete.assert_not_called()


def test_remove_store_failure(service, dao):
    dao.exists.return_value = True
    dao.delete.side_effect = StoreWriteError('commit failed')
    with pytest.raises(StoreWriteError):
        service.remove('abc')


# -------------------------------
# 4. End-to-end behavior against a stateful Redis
# -------------------------------


class TestWithStore:
    @pytest.fixture
    def service(self, store_dao) -> ShortLinkService:
        return ShortLinkService(store_dao, code_length=6)

    def test_round_trip(self, service):
        code = service.create('https://example.com')
        assert service.resolve(code) == 'https://example.com'

    def test_overwrite_with_custom_code(self, service):
        service.create('https://a.com', custom_code='abc')
        service.create('https://b.com', custom_code='abc')
        assert service.resolve('abc') == 'https://b.com'

    def test_expiry(self, service, fake_redis):
        code = service.create('https://x.com', expiry=1)
        assert 59 <= fake_redis.ttl(code) <= 60

        # Simulate the expiry window elapsing
        fake_redis.pexpireat(code, 1)

        with pytest.raises(NotFoundError):
            service.resolve(code)

    def test_delete_then_resolve(self, service):
        service.create('https://example.com', custom_code='xyz')
        service.remove('xyz')

        with pytest.raises(NotFoundError):
            service.resolve('xyz')

    def test_remove_absent_code(self, service):
        with pytest.raises(NotFoundError):
            service.remove('absent')

    def test_collision_retries_skip_taken_codes(self, store_dao):
        store_dao.set('aaaaaa', 'https://taken.com')
        service = ShortLinkService(store_dao, collision_retries=1)

        with patch('localshortener.services.shortening_service.generate_shortcode', side_effect=['aaaaaa', 'bbbbbb']):
            code = service.create('https://new.com')

        assert code == 'bbbbbb'
        assert service.resolve('aaaaaa') == 'https://taken.com'
