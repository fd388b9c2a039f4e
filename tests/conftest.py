"""
Shared pytest fixtures for Article Processor tests.
"""

import pytest
import sys
import importlib.util
from pathlib import Path
from unittest.mock import patch

from news_processor.config import PipelineConfig

# Project root for finding Cloud Function modules
PROJECT_ROOT = Path(__file__).parent.parent


def _load_module_from_path(module_name: str, file_path: Path):
    """Load a module from a specific file path."""
    spec = importlib.util.spec_from_file_location(module_name, file_path)
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


# Load the Cloud Function module with a unique name at module load time
_article_processor_module = _load_module_from_path(
    'article_processor_main',
    PROJECT_ROOT / 'article-processor' / 'main.py'
)


# ============================================================================
# Test doubles
# ============================================================================

class FakeModel:
    """TextModel double that replays canned responses and records prompts."""

    def __init__(self, responses=None, error=None):
        self.responses = list(responses or [])
        self.error = error
        self.prompts = []

    def generate(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.responses.pop(0)


@pytest.fixture(autouse=True)
def no_sleep():
    """Skip the rate-limit delays between model calls."""
    with patch('news_processor.generators.time.sleep') as mock_sleep:
        yield mock_sleep


@pytest.fixture
def fake_model():
    """Factory for FakeModel instances."""
    return FakeModel


@pytest.fixture
def test_config():
    return PipelineConfig(
        airtable_token='test_airtable_token',
        airtable_base_id='appTEST',
        gemini_api_key='test_gemini_key',
        slack_bot_token='xoxb-test',
    )


@pytest.fixture
def test_env():
    """Environment variables for the Cloud Function entry point."""
    return {
        'AIRTABLE_TOKEN': 'test_airtable_token',
        'AIRTABLE_BASE_ID': 'appTEST',
        'GEMINI_API_KEY': 'test_gemini_key',
        'SLACK_BOT_TOKEN': 'xoxb-test',
    }


# ============================================================================
# Sample pages
# ============================================================================

@pytest.fixture
def sample_article_html():
    """A news page with captioned figures, ad images and social embeds."""
    return """
    <!DOCTYPE html>
    <html>
    <head><title>Inflación de marzo | Diario Ejemplo</title></head>
    <body>
        <nav><a href="/">Inicio</a> <a href="/politica">Política</a></nav>
        <article>
            <h1>La inflación de marzo fue del 3,7% según el INDEC</h1>
            <p>El Instituto Nacional de Estadística y Censos informó este jueves que la inflación
            de marzo alcanzó el 3,7%, acumulando un 8,6% en el primer trimestre del año.</p>
            <figure>
                <img src="https://cdn.example.com/fotos/indec.jpg" width="800" height="450">
                <figcaption>Fachada del INDEC en Buenos Aires.</figcaption>
            </figure>
            <p>Los rubros que más aumentaron fueron educación, vivienda y transporte, mientras que
            alimentos y bebidas mostraron una desaceleración respecto del mes anterior.</p>
            <figure>
                <img src="https://ads.example.com/banner.jpg" width="800" height="450">
                <figcaption>Publicidad</figcaption>
            </figure>
            <figure>
                <img src="https://cdn.example.com/fotos/mercado.jpg">
                <figcaption>Un mercado de Once durante la mañana.</figcaption>
            </figure>
            <blockquote class="twitter-tweet">
                <a href="https://twitter.com/INDECArgentina/status/1775000000000000000">Tweet</a>
            </blockquote>
            <iframe src="https://www.youtube.com/watch?v=dQw4w9WgXcQ&feature=share"></iframe>
        </article>
        <footer>© Diario Ejemplo</footer>
    </body>
    </html>
    """


@pytest.fixture
def mock_flask_request():
    """Factory for creating mock Flask request objects."""
    class MockRequest:
        def __init__(self, json_data=None, method='POST'):
            self._json = json_data
            self.method = method
            self.data = b''

        def get_json(self, force=False, silent=False):
            return self._json

    return MockRequest


# ============================================================================
# Cloud Function fixtures
# ============================================================================

@pytest.fixture
def process_article():
    """Returns main entry point from article-processor."""
    return _article_processor_module.process_article


@pytest.fixture
def article_processor_module():
    return _article_processor_module
