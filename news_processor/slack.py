"""
Slack progress notifications.

Failures are logged and swallowed: a notification problem must never change
the outcome of the pipeline.
"""

from typing import Optional

import requests

from .config import PipelineConfig

SLACK_POST_MESSAGE_URL = 'https://slack.com/api/chat.postMessage'


def build_slack_payload(channel: str, text: Optional[str], attachment: Optional[dict] = None) -> dict:
    payload = {
        'channel': f'#{channel}',
        'text': text,
    }
    if attachment:
        payload['attachments'] = [attachment]
    return payload


def send_slack_update(config: PipelineConfig, channel: str, text: Optional[str],
                      attachment: Optional[dict] = None) -> bool:
    """Post a status message (and optional attachment). Returns True if Slack accepted it."""
    payload = build_slack_payload(channel, text, attachment)

    try:
        response = requests.post(
            SLACK_POST_MESSAGE_URL,
            headers={
                'Authorization': f'Bearer {config.slack_bot_token}',
                'Content-Type': 'application/json',
            },
            json=payload,
            timeout=10,
        )
        data = response.json()
        if not data.get('ok'):
            print(f"Slack rejected update for #{channel}: {data.get('error')}")
            return False
        return True
    except Exception as e:
        print(f"Error sending Slack update: {e}")
        return False


def build_summary_attachment(title: str, source: str, record_id: str, user_name: Optional[str]) -> dict:
    """Final success summary shown under the completion message."""
    fields = [
        {'title': 'Title', 'value': title, 'short': False},
        {'title': 'Source', 'value': source, 'short': True},
        {'title': 'Record ID', 'value': record_id, 'short': True},
    ]
    if user_name:
        fields.append({'title': 'Requested by', 'value': user_name, 'short': True})

    return {
        'text': '✅ Article processed successfully!',
        'color': 'good',
        'fields': fields,
    }
