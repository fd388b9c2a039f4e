"""
Article Processor Cloud Function

Turns a URL shared in Slack into a draft news article in Airtable.

Responsibilities:
- Fetch the shared page and extract text, captioned images and embeds
- Generate title, bajada, volanta, rewritten body, tags and social copy with Gemini
- Update the Airtable record created by the Slack webhook
- Report progress and the final result to the Slack channel

Does NOT:
- Create Airtable records (the Slack webhook does)
- Retry failed runs
"""

import functions_framework
import os
import sys
import json
import traceback

# Add shared package to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
from news_processor.config import PipelineConfig
from news_processor.pipeline import ArticlePipeline, ProcessingRequest

JSON_HEADERS = {'Content-Type': 'application/json'}


@functions_framework.http
def process_article(request):
    """
    Main Cloud Function entry point.

    Expected JSON input:
    {
        "recordId": "recXXXXXXXXXXXXXX",
        "url": "https://example.com/article",
        "channel_name": "noticias",
        "user_name": "editor"
    }
    """
    if request.method != 'POST':
        return ('Method Not Allowed', 405)

    channel = None
    pipeline = ArticlePipeline(PipelineConfig.from_env())

    try:
        body = request.get_json(silent=True)
        if isinstance(body, dict):
            channel = body.get('channel_name')

        processing_request = ProcessingRequest.from_json(body)
        pipeline.run(processing_request)

        return (json.dumps({'success': True}), 200, JSON_HEADERS)

    except Exception as e:
        print(f"Processing error: {str(e)}\n{traceback.format_exc()}")
        pipeline.notify(channel, f"❌ Error: {str(e)}")

        return (json.dumps({'error': str(e)}), 500, JSON_HEADERS)
