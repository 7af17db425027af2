#!/usr/bin/env python3
"""
Tests for:
* DramaBoxCatalogClient (latest / search / stream links / token helpers)
* envelope extraction and episode coercion helpers

Run with:
    python -m pytest tests/test_provider.py
"""
import unittest
from unittest.mock import MagicMock

import requests

from drama_providers.base.auth import DeviceIdentity, TokenTier
from drama_providers.base.exceptions import InvalidInput, UpstreamError
from drama_providers.providers.dramabox import DramaBoxCatalogClient
from drama_providers.providers.dramabox.models import (coerce_episode, extract_list,
                                                       first_cdn_url, summarize_chapter)

DEVICE_ID = 'abcdefabcdefabcdefabcdefabcdefab'
AUTH_SUFFIX = '/auth/token'


# ===========================================================================
# Helpers
# ===========================================================================

def _ok_resp(body):
    resp = MagicMock()
    resp.status_code = 200
    resp.json.return_value = body
    resp.raise_for_status.return_value = None
    return resp


class FakeUpstream:
    """Routes POSTs by URL: auth always succeeds, API calls return a canned envelope"""

    def __init__(self, envelope=None, api_error=None):
        self.envelope = envelope if envelope is not None else {}
        self.api_error = api_error
        self.api_calls = []
        self.auth_calls = 0

    def post(self, url, **kwargs):
        if url.endswith(AUTH_SUFFIX):
            self.auth_calls += 1
            return _ok_resp({'data': {'token': 'live-token'}})
        self.api_calls.append((url, kwargs))
        if self.api_error is not None:
            raise self.api_error
        return _ok_resp(self.envelope)

    @property
    def last_body(self):
        return self.api_calls[-1][1]['json_data']

    @property
    def last_headers(self):
        return self.api_calls[-1][1]['headers']


def _client(upstream):
    http = MagicMock()
    http.post.side_effect = upstream.post
    sleeps = []
    client = DramaBoxCatalogClient(
        http_manager=http,
        device=DeviceIdentity(generator=lambda n: DEVICE_ID),
        sleep=sleeps.append,
    )
    return client, sleeps


# ===========================================================================
# get_latest
# ===========================================================================

class TestLatest(unittest.TestCase):

    def test_body_and_endpoint(self):
        upstream = FakeUpstream()
        client, _ = _client(upstream)

        client.get_latest(2)

        url, _ = upstream.api_calls[-1]
        self.assertTrue(url.endswith('/he001/theater'))
        self.assertEqual(upstream.last_body, {
            'newChannelStyle': 1,
            'isNeedRank': 1,
            'pageNo': 2,
            'index': 1,
            'channelId': 43,
        })

    def test_missing_theater_list_is_empty(self):
        client, _ = _client(FakeUpstream({'data': {}}))
        self.assertEqual(client.get_latest(2), [])

    def test_records_extracted(self):
        records = [{'bookId': '1', 'bookName': 'A'}, {'bookId': '2', 'bookName': 'B'}]
        client, _ = _client(FakeUpstream({'data': {'newTheaterList': {'records': records}}}))
        self.assertEqual(client.get_latest(), records)

    def test_default_page(self):
        upstream = FakeUpstream()
        client, _ = _client(upstream)
        client.get_latest()
        self.assertEqual(upstream.last_body['pageNo'], 1)

    def test_catalog_cid_and_live_token(self):
        upstream = FakeUpstream()
        client, _ = _client(upstream)
        client.get_latest()
        self.assertEqual(upstream.last_headers['cid'], 'DRA1000042')
        self.assertEqual(upstream.last_headers['tn'], 'Bearer live-token')
        self.assertEqual(upstream.last_headers['device-id'], DEVICE_ID)


# ===========================================================================
# search
# ===========================================================================

class TestSearch(unittest.TestCase):

    def test_keyword_sent_verbatim(self):
        upstream = FakeUpstream()
        client, _ = _client(upstream)

        client.search('eternal love')

        url, _ = upstream.api_calls[-1]
        self.assertTrue(url.endswith('/search/suggest'))
        self.assertEqual(upstream.last_body, {'keyword': 'eternal love'})

    def test_suggest_list_extracted(self):
        suggestions = [{'bookId': '9', 'bookName': 'Eternal Love'}]
        client, _ = _client(FakeUpstream({'data': {'suggestList': suggestions}}))
        self.assertEqual(client.search('eternal'), suggestions)

    def test_null_suggest_list_is_empty(self):
        client, _ = _client(FakeUpstream({'data': {'suggestList': None}}))
        self.assertEqual(client.search('x'), [])


# ===========================================================================
# get_stream_links
# ===========================================================================

class TestStreamLinks(unittest.TestCase):

    def test_episode_string_coerced(self):
        upstream = FakeUpstream()
        client, _ = _client(upstream)

        client.get_stream_links('b123', '3')

        body = upstream.last_body
        self.assertEqual(body['index'], 3)
        self.assertIsInstance(body['index'], int)
        self.assertEqual(body['bookId'], 'b123')

    def test_episode_int_passthrough(self):
        upstream = FakeUpstream()
        client, _ = _client(upstream)
        client.get_stream_links('b123', 3)
        self.assertEqual(upstream.last_body['index'], 3)

    def test_playback_context_fields(self):
        upstream = FakeUpstream()
        client, _ = _client(upstream)

        client.get_stream_links('b123', 1)

        body = upstream.last_body
        self.assertEqual(body['boundaryIndex'], 0)
        self.assertEqual(body['comingPlaySectionId'], -1)
        self.assertEqual(body['currencyPlaySource'], 'discover_new_rec_new')
        self.assertEqual(body['needEndRecommend'], 0)
        self.assertIs(body['preLoad'], False)
        self.assertEqual(body['loadDirection'], 0)
        for key in ('currencyPlaySourceName', 'rid', 'pullCid', 'startUpKey'):
            self.assertEqual(body[key], '')

    def test_stream_cid_and_endpoint(self):
        upstream = FakeUpstream()
        client, _ = _client(upstream)

        client.get_stream_links('b123', 1)

        url, _ = upstream.api_calls[-1]
        self.assertTrue(url.endswith('/chapterv2/batch/load'))
        self.assertEqual(upstream.last_headers['cid'], 'DRA1000000')

    def test_chapter_list_extracted(self):
        chapters = [{'index': 3, 'cdnList': ['https://cdn.test/3.m3u8']}]
        client, _ = _client(FakeUpstream({'data': {'chapterList': chapters}}))
        self.assertEqual(client.get_stream_links('b123', '3'), chapters)

    def test_invalid_episode_rejected_before_network(self):
        upstream = FakeUpstream()
        client, _ = _client(upstream)
        with self.assertRaises(InvalidInput):
            client.get_stream_links('b123', 'three')
        self.assertEqual(upstream.api_calls, [])

    def test_upstream_failure_after_retries(self):
        upstream = FakeUpstream(api_error=requests.ConnectionError('down'))
        client, sleeps = _client(upstream)

        with self.assertRaises(UpstreamError):
            client.get_stream_links('b123', 1)
        self.assertEqual(len(upstream.api_calls), 4)
        self.assertEqual(sleeps, [1.0, 1.0, 1.0])


# ===========================================================================
# Token helpers
# ===========================================================================

class TestTokenHelpers(unittest.TestCase):

    def test_token_minted_once_across_calls(self):
        upstream = FakeUpstream()
        client, _ = _client(upstream)

        client.get_latest()
        client.search('x')

        self.assertEqual(upstream.auth_calls, 1)

    def test_refresh_token(self):
        upstream = FakeUpstream()
        client, _ = _client(upstream)
        client.get_latest()

        token = client.refresh_token()

        self.assertEqual(token.tier, TokenTier.LIVE)
        self.assertEqual(upstream.auth_calls, 2)

    def test_token_info(self):
        client, _ = _client(FakeUpstream())
        info = client.token_info()
        self.assertEqual(info['deviceId'], DEVICE_ID)
        self.assertFalse(info['hasToken'])


# ===========================================================================
# Model helpers
# ===========================================================================

class TestExtractList(unittest.TestCase):

    def test_missing_segments(self):
        path = ('data', 'newTheaterList', 'records')
        for envelope in (None, {}, {'data': None}, {'data': {'newTheaterList': None}},
                         {'data': []}, 'text', {'data': {'newTheaterList': {'records': {}}}}):
            with self.subTest(envelope=envelope):
                self.assertEqual(extract_list(envelope, path), [])

    def test_found(self):
        self.assertEqual(extract_list({'a': {'b': [1, 2]}}, ('a', 'b')), [1, 2])


class TestCoerceEpisode(unittest.TestCase):

    def test_valid(self):
        for raw, expected in ((3, 3), ('3', 3), (' 7 ', 7), (3.0, 3), ('3.0', 3), ('-1', -1)):
            with self.subTest(raw=raw):
                self.assertEqual(coerce_episode(raw), expected)

    def test_invalid(self):
        for raw in ('', 'abc', None, True, [], float('nan'), 'inf'):
            with self.subTest(raw=raw):
                with self.assertRaises(InvalidInput):
                    coerce_episode(raw)


class TestChapterHelpers(unittest.TestCase):

    def test_first_cdn_url(self):
        self.assertEqual(first_cdn_url({'cdnList': ['a', 'b']}), 'a')
        self.assertIsNone(first_cdn_url({'cdnList': []}))
        self.assertIsNone(first_cdn_url({}))

    def test_summarize_chapter(self):
        chapter = {'index': 1, 'title': 'Ep 1', 'duration': 90, 'cdnList': ['x']}
        self.assertEqual(summarize_chapter(chapter), {'index': 1, 'title': 'Ep 1', 'duration': 90})


if __name__ == '__main__':
    unittest.main()
