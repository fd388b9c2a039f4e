"""
Airtable record updates for processed articles.

Writes every generated field into an existing record in one PATCH call.
Errors are raised to the caller: a failed write fails the whole invocation.
"""

from urllib.parse import quote

import requests

from .config import PipelineConfig

AIRTABLE_API_URL = 'https://api.airtable.com/v0'
MAX_IMAGE_ATTACHMENTS = 3
INITIAL_STATUS = 'draft'


def build_record_fields(metadata: dict, article: str, tags: str, social_text: str,
                        images: list, embeds: dict) -> dict:
    """Map generated artifacts onto the Airtable field names."""
    return {
        'title': metadata.get('title') or 'Processed Article',
        'overline': metadata.get('volanta') or '',
        'excerpt': metadata.get('bajada') or '',
        'article': article,
        'tags': tags,
        'socialMediaText': social_text,
        'imgUrl': images[0] if images else '',
        'article-images': ', '.join(images),
        'ig-post': embeds.get('instagram') or '',
        'fb-post': embeds.get('facebook') or '',
        'tw-post': embeds.get('twitter') or '',
        'yt-video': embeds.get('youtube') or '',
        'image': [{'url': url} for url in images[:MAX_IMAGE_ATTACHMENTS]],
        'status': INITIAL_STATUS,
    }


def record_url(config: PipelineConfig, record_id: str) -> str:
    table = quote(config.airtable_table, safe='')
    return f"{AIRTABLE_API_URL}/{config.airtable_base_id}/{table}/{quote(record_id, safe='')}"


def update_article_record(config: PipelineConfig, record_id: str, fields: dict) -> dict:
    """Update an existing record by ID. Returns the Airtable response body."""
    response = requests.patch(
        record_url(config, record_id),
        headers={
            'Authorization': f'Bearer {config.airtable_token}',
            'Content-Type': 'application/json',
        },
        json={'fields': fields},
        timeout=30,
    )
    response.raise_for_status()
    return response.json()
