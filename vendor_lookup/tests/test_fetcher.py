"""Tests for HTTP and file source fetchers."""
import httpx
import pytest

from ..errors import FetchError
from ..sources import FileSourceFetcher, HttpSourceFetcher, create_fetcher
from .conftest import HEADER_CSV

URL = 'https://data.example.com/customers.csv'


def make_fetcher(handler):
    return HttpSourceFetcher(URL, timeout=5, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_http_fetch_bypasses_cache():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, content=HEADER_CSV.encode('utf-8'))

    text = await make_fetcher(handler).fetch()

    assert text == HEADER_CSV
    request = requests[0]
    assert request.url.path == '/customers.csv'
    assert request.url.params['v'].isdigit()
    assert request.headers['Cache-Control'] == 'no-cache'
    assert request.headers['Pragma'] == 'no-cache'


@pytest.mark.asyncio
async def test_http_status_failure():
    fetcher = make_fetcher(lambda request: httpx.Response(404))

    with pytest.raises(FetchError) as excinfo:
        await fetcher.fetch()

    assert excinfo.value.status == 404
    assert excinfo.value.reason == 'Not Found'


@pytest.mark.asyncio
async def test_http_transport_failure():
    def handler(request):
        raise httpx.ConnectError('connection refused', request=request)

    with pytest.raises(FetchError) as excinfo:
        await make_fetcher(handler).fetch()
    assert excinfo.value.status is None


@pytest.mark.asyncio
async def test_http_timeout_is_fetch_error():
    def handler(request):
        raise httpx.ReadTimeout('timed out', request=request)

    with pytest.raises(FetchError, match='Timed out'):
        await make_fetcher(handler).fetch()


@pytest.mark.asyncio
async def test_http_strips_bom():
    fetcher = make_fetcher(lambda request: httpx.Response(200, content=b'\xef\xbb\xbf' + HEADER_CSV.encode('utf-8')))
    assert await fetcher.fetch() == HEADER_CSV


@pytest.mark.asyncio
async def test_file_fetch_reads_current_content(csv_file):
    fetcher = FileSourceFetcher(csv_file)
    assert await fetcher.fetch() == HEADER_CSV

    csv_file.write_text('customer,vendor\nNew Co,New Vendor\n', encoding='utf-8')
    assert await fetcher.fetch() == 'customer,vendor\nNew Co,New Vendor\n'


@pytest.mark.asyncio
async def test_missing_file_is_fetch_error(tmp_path):
    with pytest.raises(FetchError) as excinfo:
        await FileSourceFetcher(tmp_path / 'missing.csv').fetch()
    assert excinfo.value.status == 404


@pytest.mark.asyncio
async def test_invalid_utf8_is_fetch_error(tmp_path):
    path = tmp_path / 'big5.csv'
    path.write_bytes('客戶'.encode('big5'))
    with pytest.raises(FetchError, match='UTF-8'):
        await FileSourceFetcher(path).fetch()


def test_create_fetcher_picks_by_scheme(tmp_path):
    assert isinstance(create_fetcher(URL), HttpSourceFetcher)
    assert isinstance(create_fetcher('http://localhost:8000/data.csv'), HttpSourceFetcher)
    assert isinstance(create_fetcher(tmp_path / 'customers.csv'), FileSourceFetcher)
    assert create_fetcher('./data/customers.csv', timeout=3).timeout == 3
