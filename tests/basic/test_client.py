import pytest

from highlightd import client


@pytest.fixture
def address(highlight_service):
    return highlight_service.listening_address


@pytest.mark.asyncio
async def test_highlight(address) -> None:
    markup = await client.highlight("fn main() {}", "rust", address=address)

    assert '<span class="token keyword">fn</span>' in markup


@pytest.mark.asyncio
async def test_highlight_failure(address) -> None:
    with pytest.raises(client.HighlightFailed) as excinfo:
        await client.highlight("x", "cobol", address=address)

    assert "no such language recognized" in str(excinfo.value)


@pytest.mark.asyncio
async def test_service_unavailable(closed_port) -> None:
    with pytest.raises(client.ServiceUnavailable):
        await client.highlight("fn main() {}", "rust", address=closed_port)


@pytest.mark.asyncio
async def test_code_block(address) -> None:
    block = await client.code_block_to_html("fn main() {}", "rust", address=address)

    assert block.startswith('<pre><code class="language-rust">\n<span ')
    assert block.endswith("\n</code></pre>")


@pytest.mark.asyncio
async def test_code_block_without_language(closed_port) -> None:
    block = await client.code_block_to_html("a < b", None, address=closed_port)

    assert block == "<pre><code>\na &lt; b\n</code></pre>"


@pytest.mark.asyncio
async def test_code_block_falls_back_to_plain_text(address) -> None:
    block = await client.code_block_to_html("a < b", "cobol", address=address)

    assert block == '<pre><code class="language-cobol">\na &lt; b\n</code></pre>'


def test_highlight_sync(threaded_service) -> None:
    markup = client.highlight_sync("fn main() {}", "rust", address=threaded_service)

    assert '<span class="token keyword">fn</span>' in markup


def test_highlight_sync_failure(threaded_service) -> None:
    with pytest.raises(client.HighlightFailed):
        client.highlight_sync("x", "cobol", address=threaded_service, timeout=10)
