"""
Gemini-backed generators for article metadata, body, tags and social copy.

Each generator owns its prompt, cleans the model response and falls back to a
fixed value on any error, so the record write always receives usable text.
Calls are spaced with fixed delays to stay under the Gemini rate limit.
"""

import json
import re
import time

import google.generativeai as genai

# Seconds to wait before each model call
METADATA_DELAY = 2
REELABORATE_DELAY = 3
TAGS_DELAY = 2
SOCIAL_DELAY = 2

METADATA_TEXT_LIMIT = 5000
REELABORATE_TEXT_LIMIT = 5000
TAGS_TEXT_LIMIT = 4000

MAX_SOCIAL_LENGTH = 500

METADATA_FIELDS = ('title', 'bajada', 'volanta')

FALLBACK_METADATA = {
    'title': 'Article processed via Slack',
    'bajada': 'Processed content from shared URL',
    'volanta': 'Noticias',
}
FALLBACK_TAGS = 'Noticias, Actualidad'


class TextModel:
    """Minimal interface the generators need from a language model."""

    def generate(self, prompt: str) -> str:
        raise NotImplementedError


class GeminiModel(TextModel):
    """TextModel backed by google.generativeai."""

    def __init__(self, api_key: str, model_name: str = 'gemini-2.0-flash'):
        genai.configure(api_key=api_key)
        self._model = genai.GenerativeModel(model_name)

    def generate(self, prompt: str) -> str:
        response = self._model.generate_content(prompt)
        return response.text


def strip_code_fences(text: str) -> str:
    """Remove ```json / ``` markers that Gemini wraps around JSON output."""
    return text.replace('```json', '').replace('```', '').strip()


def extract_json_array(text: str) -> list:
    """Parse the first [...] block in a response, ignoring surrounding commentary."""
    match = re.search(r'\[.*?\]', text, re.DOTALL)
    if not match:
        raise ValueError('No valid JSON found')
    return json.loads(match.group())


def truncate_social_text(text: str, max_length: int = MAX_SOCIAL_LENGTH) -> str:
    """Cap text at max_length characters, ending with '...' when cut."""
    if len(text) > max_length:
        return text[:max_length - 3] + '...'
    return text


def generate_metadata(extracted_text: str, model: TextModel) -> dict:
    """Generate title, bajada (summary) and volanta (overline)."""
    try:
        time.sleep(METADATA_DELAY)

        prompt = f"""
Extracted Text: "{extracted_text[:METADATA_TEXT_LIMIT]}"

Basado en el texto anterior, genera lo siguiente:
1. Un título conciso y atractivo. **No uses mayúsculas en todas las palabras**.
2. Un resumen (bajada) de 40 a 50 palabras que capture los puntos clave.
3. Una volanta corta que brinde contexto.

Return the output in JSON format:
{{
  "title": "Generated Title",
  "bajada": "Generated summary",
  "volanta": "Generated overline"
}}
"""

        response_text = model.generate(prompt)
        parsed = json.loads(strip_code_fences(response_text))
        if not isinstance(parsed, dict):
            raise ValueError(f'Expected a JSON object, got {type(parsed).__name__}')

        metadata = {}
        for field in METADATA_FIELDS:
            value = parsed.get(field)
            if value is None:
                continue
            if not isinstance(value, str):
                raise ValueError(f"Field '{field}' is {type(value).__name__}, expected a string")
            metadata[field] = value
        return metadata
    except Exception as e:
        print(f"Error generating metadata: {e}")
        return dict(FALLBACK_METADATA)


def reelaborate_text(extracted_text: str, image_markdown: str, model: TextModel) -> str:
    """Rewrite the article in formal Rioplatense Spanish. Falls back to the original text."""
    try:
        time.sleep(REELABORATE_DELAY)

        images_line = f"Incluir estas descripciones:\n\n{image_markdown}" if image_markdown else ''

        prompt = f"""
Reelaborar la siguiente noticia siguiendo estas pautas:

1. **Lenguaje**: Utilizar un **español rioplatense formal**.
2. **Estructura**: OBLIGATORIO: Dividir el texto en secciones con subtítulos (## Subtítulo).
3. **Sintaxis**: OBLIGATORIO: Incluir al menos una lista con viñetas:
   - Primer punto clave
   - Segundo punto clave
   - Tercer punto clave
4. **Formato**: Usar **negritas** para resaltar información importante.
5. **Imágenes**: {images_line}

Texto extraído: "{extracted_text[:REELABORATE_TEXT_LIMIT]}"
"""

        return model.generate(prompt)
    except Exception as e:
        print(f"Error reelaborating text: {e}")
        return extracted_text


def generate_tags(extracted_text: str, metadata: dict, model: TextModel) -> str:
    """Generate 5-8 topic tags, returned as a comma-separated string."""
    try:
        time.sleep(TAGS_DELAY)

        title = (metadata or {}).get('title') or ''
        prompt = f"""
Analiza este artículo y genera entre 5 y 8 etiquetas relevantes.

TÍTULO: {title}
CONTENIDO: "{extracted_text[:TAGS_TEXT_LIMIT]}"

Devuelve SOLO un array de strings en formato JSON:
["etiqueta1", "etiqueta2", "etiqueta3"]
"""

        tags = extract_json_array(model.generate(prompt))
        return ', '.join(str(tag) for tag in tags if tag is not None)
    except Exception as e:
        print(f"Error generating tags: {e}")
        return FALLBACK_TAGS


def generate_social_media_text(extracted_text: str, metadata: dict, tags: str, model: TextModel) -> str:
    """Generate a promotional blurb under 500 characters with emojis and hashtags."""
    title = (metadata or {}).get('title') or ''

    try:
        time.sleep(SOCIAL_DELAY)

        prompt = f"""
Crea un texto atractivo para redes sociales de MENOS DE {MAX_SOCIAL_LENGTH} CARACTERES.

TÍTULO: {title}
ETIQUETAS: {tags}

Incluye emojis y hashtags relevantes.
"""

        return truncate_social_text(model.generate(prompt).strip())
    except Exception as e:
        print(f"Error generating social media text: {e}")
        return f"📰 {title or 'Nuevo artículo'} #Noticias"
