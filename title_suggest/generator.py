from typing import Any

from google import genai
from google.genai import types
from loguru import logger

from .config import SamplingConfig, settings
from .errors import ConfigurationError, UpstreamError
from .schemas import SuggestionRequest

SYSTEM_INSTRUCTION = "\n".join(
    [
        "You are an assistant that suggests YouTube video titles.",
        "Constraints:",
        "- Output MUST be a single JSON object.",
        "- Keep sentences short and formal with a casual feel (concise, catchy).",
        "- Focus on SEO-friendly titles, avoid clickbait hype.",
        "- Return only valid JSON. Do not include markdown code fences.",
        "- Use the schema strictly.",
        "JSON schema:",
        "{",
        '  "summary": {',
        '    "topic": string,',
        '    "angle": string,',
        '    "audience": string,',
        '    "notes": string',
        "  },",
        '  "titles": string // a comma-separated list of video titles',
        "}",
        "Rules:",
        "- titles must be a single string, with titles separated by commas.",
        "- Provide 8-12 options where possible.",
        "- Each title MUST be very short: strictly <= 45 characters.",
        "- Prefer crisp wording, drop filler words, avoid emojis and excessive punctuation.",
        "- Respond with JSON only. No preface, no prose.",
        "- Each title should directly answer the provided video description.",
        "- Each title must be a plain string, not an object.",
        "- Do not return titles as an array or object - only as a comma-separated string.",
        'Example: "titles": "Title 1, Title 2, Title 3, Title 4"',
    ]
)

RESPONSE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "summary": types.Schema(
            type=types.Type.OBJECT,
            properties={
                "topic": types.Schema(type=types.Type.STRING),
                "angle": types.Schema(type=types.Type.STRING),
                "audience": types.Schema(type=types.Type.STRING),
                "notes": types.Schema(type=types.Type.STRING),
            },
            required=["topic", "angle", "audience", "notes"],
        ),
        "titles": types.Schema(type=types.Type.STRING),
    },
    required=["titles"],
)


def build_user_prompt(req: SuggestionRequest) -> str:
    """Lists only the fields the caller filled in, then the two output reminders."""
    lines: list[str] = []
    if req.description:
        lines.append(f"Description: {req.description}")
    if req.keywords:
        lines.append(f"Keywords: {', '.join(req.keywords)}")
    if req.niche:
        lines.append(f"Niche: {req.niche}")
    if req.language:
        lines.append(f"Language: {req.language}")
    lines.append("Respond in JSON only, no extra text.")
    lines.append(f"All titles must be <= {settings.max_title_length} characters each.")
    return "\n".join(lines)


def require_api_key() -> str:
    api_key = settings.gemini_api_key
    if not api_key:
        raise ConfigurationError("Missing GEMINI_API_KEY configuration")
    return api_key


async def call_llm(
    system_instruction: str,
    user_prompt: str,
    schema: types.Schema,
    sampling: SamplingConfig,
) -> Any:
    api_key = require_api_key()

    client = genai.Client(api_key=api_key)
    try:
        response = await client.aio.models.generate_content(
            model=sampling.model_name,
            contents=[types.Content(role="user", parts=[types.Part(text=user_prompt)])],
            config=types.GenerateContentConfig(
                system_instruction=system_instruction,
                response_mime_type="application/json",
                response_schema=schema,
                temperature=sampling.temperature,
                top_p=sampling.top_p,
                top_k=sampling.top_k,
                max_output_tokens=sampling.max_output_tokens,
            ),
        )
    except Exception as e:
        logger.exception(f"Generation call to {sampling.model_name} failed")
        raise UpstreamError(str(e) or "Unexpected error") from e
    finally:
        await client.aio.aclose()
    return response
