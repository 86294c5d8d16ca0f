LANGUAGE_INSTRUCTIONS = {
    "en": "Write the article in English.",
    "es": "Escribe el artículo en español (Spanish).",
    "fr": "Écrivez l'article en français (French).",
    "de": "Schreiben Sie den Artikel auf Deutsch (German).",
    "it": "Scrivi l'articolo in italiano (Italian).",
    "pt": "Escreva o artigo em português (Portuguese).",
    "zh": "用中文撰写文章 (Chinese).",
    "ja": "記事を日本語で書いてください (Japanese).",
    "ko": "기사를 한국어로 작성하세요 (Korean).",
    "ar": "اكتب المقال بالعربية (Arabic).",
    "hi": "लेख हिंदी में लिखें (Hindi).",
    "ru": "Напишите статью на русском языке (Russian).",
    "bn": "নিবন্ধটি বাংলায় লিখুন (Bengali).",
    "ta": "கட்டுரையை தமிழில் எழுதுங்கள் (Tamil).",
    "te": "వ్యాసాన్ని తెలుగులో వ్రాయండి (Telugu).",
    "mr": "लेख मराठीत लिहा (Marathi).",
    "gu": "લેખ ગુજરાતીમાં લખો (Gujarati).",
}

LANGUAGE_NAMES = {
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "it": "Italian",
    "pt": "Portuguese",
    "zh": "Chinese",
    "ja": "Japanese",
    "ko": "Korean",
    "ar": "Arabic",
    "hi": "Hindi",
    "ru": "Russian",
    "bn": "Bengali",
    "ta": "Tamil",
    "te": "Telugu",
    "mr": "Marathi",
    "gu": "Gujarati",
}

SEO_INSTRUCTIONS = """
SEO optimization requirements:
1. Use the primary keyword in the first paragraph
2. Include semantic keywords naturally throughout, without keyword stuffing
3. Use H2 and H3 headings that contain keywords
4. Write a compelling meta description as the excerpt (150-160 characters, include the primary keyword)
5. Use short paragraphs (2-3 sentences each)
6. Include bullet points or numbered lists where appropriate
7. Open with a strong hook in the first sentence
8. Make the headline attention-grabbing but accurate
"""

REWRITE_INSTRUCTIONS = """
You are a professional news writer and SEO editor. Your task is to completely rewrite a news item into an original article while keeping it factually accurate.

Rules

1. Create a completely new article. Do not copy any phrase from the original verbatim.
2. Keep every fact from the original. Do not invent facts, quotes, numbers or names.
3. Use a professional, objective, journalistic tone.
4. The article should be 500-800 words and may add neutral background context.
5. {language_instruction}
{seo_instructions}
Output format (JSON only)
{{
  "title": "new headline, 60 characters max",
  "content": "full article as an HTML fragment using <p>, <h2>, <h3>, <ul>, <li> tags",
  "excerpt": "short compelling summary",
  "imagePrompt": "detailed prompt for a header image (scene, style, colors), always in English",
  "seoKeywords": ["5-8 relevant keywords"]
}}

Do not include any additional text outside the JSON object.
"""

TRANSLATE_INSTRUCTIONS = """
You are a professional translator. Translate the following news article into {language_name}.
Keep the HTML formatting exactly as provided. Only translate the text content and keep every HTML tag intact.

Output format (JSON only)
{{
  "translatedTitle": "string",
  "translatedContent": "string"
}}
"""

IMAGE_INSTRUCTIONS = """Generate a professional, high-quality news article header image for this topic: {prompt}

Requirements:
- Photojournalistic style
- Suitable for a news website header
- Visually compelling and relevant to the topic
- No text overlays
- 16:9 aspect ratio composition"""


def build_rewrite_instructions(language: str, optimize_seo: bool) -> str:
    language_instruction = LANGUAGE_INSTRUCTIONS.get(language, LANGUAGE_INSTRUCTIONS["en"])
    return REWRITE_INSTRUCTIONS.format(
        language_instruction=language_instruction,
        seo_instructions=SEO_INSTRUCTIONS if optimize_seo else "",
    )
