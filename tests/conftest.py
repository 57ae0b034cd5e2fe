import copy
import json
import os
import pytest
from unittest.mock import patch
from dotenv import load_dotenv

from marketing_agent.llm.schema import MarketingAnalysis, example_payload

@pytest.fixture(scope="session", autouse=True)
def _load_env():
    # Load .env once per session to avoid side-effects on import time
    load_dotenv()

def _truthy(v: str | None) -> bool:
    return v is not None and v.strip().lower() not in ("", "0", "false", "no")

@pytest.fixture(scope="session")
def allow_integration(_load_env) -> bool:
    # Depends on _load_env to ensure .env is loaded first
    return _truthy(os.getenv("RUN_INTEGRATION_TESTS"))

@pytest.fixture(scope="session")
def anthropic_api_key(_load_env) -> str | None:
    key = os.getenv("ANTHROPIC_API_KEY")
    if not key or key == "sk-ant-...":
        return None
    return key

@pytest.fixture
def mock_httpx():
    """
    Mocks httpx.Client for retrieval tests.
    Yields the client instance returned by the context manager.
    """
    with patch("httpx.Client") as mock_client:
        yield mock_client.return_value.__enter__.return_value

@pytest.fixture
def mock_response(mock_httpx):
    """
    The response yielded by `client.stream(...)`.
    Set `iter_bytes.return_value` to the body chunks.
    """
    response = mock_httpx.stream.return_value.__enter__.return_value
    response.encoding = "utf-8"
    response.iter_bytes.return_value = []
    return response

@pytest.fixture
def serve_html(mock_response):
    def _serve(html: str):
        mock_response.iter_bytes.return_value = [html.encode("utf-8")]
    return _serve

@pytest.fixture
def sample_html() -> str:
    return """
    <html>
        <head>
            <title> Acme Rockets </title>
            <meta name="description" content="Rockets for everyone">
            <style>.hero { color: red; }</style>
        </head>
        <body>
            <nav><h1>Menu</h1><a href="/">Home</a></nav>
            <h1>Fly Higher</h1>
            <h1>Since 1949</h1>
            <h2>Products</h2>
            <h2>Pricing</h2>
            <p>Acme   builds
               reusable rockets.</p>
            <script>var tracking = "secret-token";</script>
            <noscript>Please enable JavaScript</noscript>
            <iframe>frame text</iframe>
            <!-- hidden comment -->
            <footer>Copyright Acme Corp</footer>
        </body>
    </html>
    """

@pytest.fixture
def valid_payload() -> dict:
    """A complete analysis in wire (camelCase) form."""
    payload = copy.deepcopy(example_payload())
    payload["overview"]["businessType"] = "Reusable rocket manufacturer"
    payload["overview"]["targetAudience"] = "Satellite operators and research labs"
    return payload

@pytest.fixture
def valid_json(valid_payload) -> str:
    return json.dumps(valid_payload, indent=2)

@pytest.fixture
def sample_analysis(valid_payload) -> MarketingAnalysis:
    return MarketingAnalysis.model_validate(valid_payload)
