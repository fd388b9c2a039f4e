"""
Configuration for the article processor.

Credentials and service settings are read from the Cloud Function
environment once, then passed into the pipeline explicitly.
"""

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_AIRTABLE_TABLE = 'Slack Noticias'
DEFAULT_GEMINI_MODEL = 'gemini-2.0-flash'
DEFAULT_FETCH_TIMEOUT = 10


@dataclass(frozen=True)
class PipelineConfig:
    airtable_token: Optional[str] = None
    airtable_base_id: Optional[str] = None
    airtable_table: str = DEFAULT_AIRTABLE_TABLE
    gemini_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    slack_bot_token: Optional[str] = None
    fetch_timeout: int = DEFAULT_FETCH_TIMEOUT

    @classmethod
    def from_env(cls, environ=None) -> 'PipelineConfig':
        """Build a config from environment variables (defaults to os.environ)."""
        env = os.environ if environ is None else environ

        timeout = env.get('FETCH_TIMEOUT')
        try:
            fetch_timeout = int(timeout) if timeout else DEFAULT_FETCH_TIMEOUT
        except ValueError:
            print(f"Invalid FETCH_TIMEOUT '{timeout}', using {DEFAULT_FETCH_TIMEOUT}s")
            fetch_timeout = DEFAULT_FETCH_TIMEOUT

        return cls(
            airtable_token=env.get('AIRTABLE_TOKEN'),
            airtable_base_id=env.get('AIRTABLE_BASE_ID'),
            airtable_table=env.get('AIRTABLE_TABLE') or DEFAULT_AIRTABLE_TABLE,
            gemini_api_key=env.get('GEMINI_API_KEY'),
            gemini_model=env.get('GEMINI_MODEL') or DEFAULT_GEMINI_MODEL,
            slack_bot_token=env.get('SLACK_BOT_TOKEN'),
            fetch_timeout=fetch_timeout,
        )
