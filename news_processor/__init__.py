"""Article processing for the Slack news desk."""

from .config import PipelineConfig

from .content import (
    USER_AGENT,
    fetch_content,
    extract_text,
    extract_images_as_markdown,
    extract_embed,
    extract_embeds,
    extract_source_name,
)

from .generators import (
    TextModel,
    GeminiModel,
    generate_metadata,
    reelaborate_text,
    generate_tags,
    generate_social_media_text,
)

from .airtable import build_record_fields, update_article_record
from .slack import send_slack_update
from .pipeline import ArticlePipeline, ExtractedContent, ProcessingRequest

__all__ = [
    'PipelineConfig',
    # Content extraction
    'USER_AGENT',
    'fetch_content',
    'extract_text',
    'extract_images_as_markdown',
    'extract_embed',
    'extract_embeds',
    'extract_source_name',
    # Generation
    'TextModel',
    'GeminiModel',
    'generate_metadata',
    'reelaborate_text',
    'generate_tags',
    'generate_social_media_text',
    # Integrations
    'build_record_fields',
    'update_article_record',
    'send_slack_update',
    # Pipeline
    'ArticlePipeline',
    'ExtractedContent',
    'ProcessingRequest',
]
