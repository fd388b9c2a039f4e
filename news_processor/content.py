"""
Content extraction for shared article URLs.

Responsibilities:
- Fetch the raw page markup
- Extract the readable article text
- Collect captioned images and build the image description block
- Detect social embeds (Instagram, Facebook, Twitter/X, YouTube)

Every function here degrades to an empty value instead of raising, so a
broken page only lowers the quality of the generated record.
"""

import re
from typing import Optional
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup, UnicodeDammit
from lxml import html as lxml_html
from readability import Document

USER_AGENT = 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36'

# Substrings that mark tracking pixels and ad images
BLOCKED_IMAGE_PATTERNS = ['ad.', 'ads.', 'pixel.']

# Images with a declared dimension below this are thumbnails
MIN_IMAGE_DIMENSION = 100

_URL_PREFIX = r'(?:https?://)?(?:www\.)?'

EMBED_PATTERNS = {
    'instagram': re.compile(_URL_PREFIX + r'instagram\.com/p/([^/\s"\']+)', re.I),
    'facebook': re.compile(_URL_PREFIX + r'facebook\.com/[^/\s"\']+/posts/([^/\s"\']+)', re.I),
    'twitter': re.compile(_URL_PREFIX + r'(twitter\.com|x\.com)/[^/\s"\']+/status/([^/\s"\']+)', re.I),
    'youtube': re.compile(_URL_PREFIX + r'youtube\.com/watch\?v=([^&\s"\']+)', re.I),
}


def fetch_content(url: str, timeout: int = 10) -> Optional[str]:
    """Fetch raw page markup. Returns None on any request failure."""
    try:
        response = requests.get(url, headers={'User-Agent': USER_AGENT}, timeout=timeout)
        response.raise_for_status()

        # Without a header charset requests assumes ISO-8859-1; let the page's meta tag decide
        if 'charset' in response.headers.get('Content-Type', '').lower():
            return response.text
        return UnicodeDammit(response.content, is_html=True).unicode_markup
    except requests.exceptions.RequestException as e:
        print(f"Error fetching content from {url}: {e}")
        return None


def extract_text(html_content: Optional[str]) -> str:
    """Extract the main article text using readability."""
    if not html_content:
        return ''

    try:
        summary_html = Document(html_content).summary()
        tree = lxml_html.fromstring(summary_html)
        text = tree.text_content()

        lines = [line.strip() for line in text.splitlines() if line.strip()]
        return '\n'.join(lines)
    except Exception as e:
        print(f"Error extracting text: {e}")
        return ''


def _parse_dimension(value) -> int:
    """Parse a width/height attribute like '640' or '640px'. Unknown is 0."""
    if not value:
        return 0
    match = re.match(r'\s*([+-]?\d+)', str(value))
    return int(match.group(1)) if match else 0


def is_excluded_image(image_url: str, width: int = 0, height: int = 0) -> bool:
    """Check whether an image is vector/inline, an ad or tracker, or a thumbnail."""
    if '.svg' in image_url or image_url.startswith('data:'):
        return True

    for pattern in BLOCKED_IMAGE_PATTERNS:
        if pattern in image_url:
            return True

    if 0 < width < MIN_IMAGE_DIMENSION or 0 < height < MIN_IMAGE_DIMENSION:
        return True

    return False


def extract_images_as_markdown(html_content: Optional[str]) -> dict:
    """
    Collect captioned images from <figure> elements.

    Returns dict with:
        images: list - Image URLs in document order
        markdown: str - One '**Imagen:** <caption>' paragraph per image
    """
    result = {'images': [], 'markdown': ''}

    if not html_content:
        return result

    try:
        soup = BeautifulSoup(html_content, 'html.parser')

        for figure in soup.find_all('figure'):
            img = figure.find('img')
            caption_tag = figure.find('figcaption')

            if not img or not img.get('src') or not caption_tag:
                continue

            caption = caption_tag.get_text().strip()
            if not caption:
                continue

            image_url = img['src']
            width = _parse_dimension(img.get('width'))
            height = _parse_dimension(img.get('height'))

            if is_excluded_image(image_url, width, height):
                continue

            result['images'].append(image_url)
            result['markdown'] += f"**Imagen:** {caption}\n\n"

        return result
    except Exception as e:
        print(f"Error extracting images: {e}")
        return {'images': [], 'markdown': ''}


def extract_embed(html_content: Optional[str], pattern) -> str:
    """Return the first full match of pattern in the markup, or ''."""
    if not html_content:
        return ''
    match = re.search(pattern, html_content)
    return match.group(0) if match else ''


def extract_embeds(html_content: Optional[str]) -> dict:
    """Detect social post embeds. Keys: instagram, facebook, twitter, youtube."""
    return {
        platform: extract_embed(html_content, pattern)
        for platform, pattern in EMBED_PATTERNS.items()
    }


def extract_source_name(url: str) -> str:
    """Human-readable source name from a URL (e.g. 'www.lanacion.com.ar' -> 'Lanacion')."""
    if not url:
        return 'Unknown Source'

    try:
        hostname = urlparse(url).hostname
    except ValueError:
        return 'Unknown Source'

    if not hostname:
        return 'Unknown Source'

    domain = re.sub(r'^www\.', '', hostname)
    name = domain.split('.')[0]
    return name[:1].upper() + name[1:]
