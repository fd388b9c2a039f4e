"""
Article processing pipeline.

fetch -> extract -> metadata -> rewrite -> tags -> social copy -> Airtable -> Slack

Stages run strictly in order with a Slack status update before each one.
Extraction and generation stages degrade to defaults on their own; anything
that escapes run() (e.g. a failed Airtable write) is fatal for the request.
"""

from dataclasses import dataclass
from typing import Optional

from .airtable import build_record_fields, update_article_record
from .config import PipelineConfig
from .content import (
    extract_embeds,
    extract_images_as_markdown,
    extract_source_name,
    extract_text,
    fetch_content,
)
from .generators import (
    GeminiModel,
    TextModel,
    generate_metadata,
    generate_social_media_text,
    generate_tags,
    reelaborate_text,
)
from .slack import build_summary_attachment, send_slack_update


@dataclass(frozen=True)
class ProcessingRequest:
    record_id: str
    url: str
    channel_name: Optional[str] = None
    user_name: Optional[str] = None

    @classmethod
    def from_json(cls, body) -> 'ProcessingRequest':
        if not isinstance(body, dict):
            raise ValueError('Request body must be a JSON object')

        missing = [key for key in ('recordId', 'url') if not body.get(key)]
        if missing:
            raise ValueError(f"Missing required field(s): {', '.join(missing)}")

        return cls(
            record_id=body['recordId'],
            url=body['url'],
            channel_name=body.get('channel_name'),
            user_name=body.get('user_name'),
        )


@dataclass
class ExtractedContent:
    text: str
    images: list
    image_markdown: str
    embeds: dict


class ArticlePipeline:
    """Runs one processing request end to end."""

    def __init__(self, config: PipelineConfig, model: Optional[TextModel] = None):
        self.config = config
        self._model = model

    @property
    def model(self) -> TextModel:
        if self._model is None:
            self._model = GeminiModel(self.config.gemini_api_key, self.config.gemini_model)
        return self._model

    def notify(self, channel: Optional[str], text: Optional[str], attachment: Optional[dict] = None) -> None:
        if not channel:
            print(f"No Slack channel for update: {text or (attachment or {}).get('text')}")
            return
        send_slack_update(self.config, channel, text, attachment)

    def extract(self, url: str, channel: Optional[str] = None) -> ExtractedContent:
        html_content = fetch_content(url, timeout=self.config.fetch_timeout)
        if html_content is None:
            self.notify(channel, f"⚠️ Could not fetch {url}, continuing with empty content")

        images = extract_images_as_markdown(html_content)
        return ExtractedContent(
            text=extract_text(html_content),
            images=images['images'],
            image_markdown=images['markdown'],
            embeds=extract_embeds(html_content),
        )

    def run(self, request: ProcessingRequest) -> dict:
        """Process the request and update its record. Returns the written fields."""
        channel = request.channel_name

        self.notify(channel, '📄 Extracting content...')
        content = self.extract(request.url, channel)
        print(f"Extracted {len(content.text)} chars and {len(content.images)} images from {request.url}")

        self.notify(channel, '🤖 Generating metadata...')
        metadata = generate_metadata(content.text, self.model)

        self.notify(channel, '✍️ Reelaborating text...')
        article = reelaborate_text(content.text, content.image_markdown, self.model)

        self.notify(channel, '🏷️ Generating tags...')
        tags = generate_tags(content.text, metadata, self.model)

        self.notify(channel, '📱 Generating social media text...')
        social_text = generate_social_media_text(content.text, metadata, tags, self.model)

        self.notify(channel, '💾 Updating Airtable...')
        fields = build_record_fields(metadata, article, tags, social_text, content.images, content.embeds)
        update_article_record(self.config, request.record_id, fields)
        print(f"Updated record {request.record_id}")

        self.notify(channel, None, build_summary_attachment(
            fields['title'],
            extract_source_name(request.url),
            request.record_id,
            request.user_name,
        ))

        return fields
