"""
Gemini generation client.

This module performs one synchronous generateContent call per request,
asking the model to answer with JSON that follows a declared schema, and
returns the decoded, shape-checked fields.

No retries are attempted: every failure is raised to the caller as a
GenerationError subclass.
"""

import json
import logging
from typing import Any, Optional

import requests

from .config import GeminiConfig
from .models import GenerationRequest, GenerationResponse
from .sanitize import sanitize_payload

logger = logging.getLogger(__name__)


class GenerationError(Exception):
    """Base class for generation failures."""
    pass


class ConfigurationError(GenerationError):
    """Raised when no API key is configured. No call is attempted."""
    pass


class EncodingError(GenerationError):
    """Raised when the request payload cannot be serialized."""
    pass


class TransportError(GenerationError):
    """Raised on connection failures and non-200 HTTP responses."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ResponseFormatError(GenerationError):
    """Raised when the response envelope or generated JSON has the wrong shape."""
    pass


def build_payload(request: GenerationRequest) -> dict:
    """
    Build the generateContent request body.

    The prompt goes into a single user turn; generationConfig forces a JSON
    answer matching the request's schema.
    """
    return {
        "contents": [
            {
                "role": "user",
                "parts": [{"text": request.prompt_text}],
            }
        ],
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": request.schema_payload(),
        },
    }


def encode_payload(payload: dict) -> bytes:
    """
    Serialize a payload to JSON bytes.

    Non-ASCII text is kept unescaped (UTF-8). If that fails, for instance
    on unpaired surrogates, the payload is encoded once more with every
    non-ASCII character escaped.

    Raises:
        EncodingError: If neither encoding succeeds.
    """
    try:
        return json.dumps(payload, ensure_ascii=False, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        # UnicodeEncodeError is a ValueError
        logger.warning(f"UTF-8 payload encoding failed, retrying ASCII-escaped: {e}")

    try:
        return json.dumps(payload, ensure_ascii=True, allow_nan=False).encode("ascii")
    except (TypeError, ValueError) as e:
        logger.error(f"Payload encoding failed after fallback: {e}")
        raise EncodingError(f"Failed to encode JSON payload: {e}") from e


def extract_generated_text(envelope: Any) -> str:
    """
    Pull candidates[0].content.parts[0].text out of a response envelope.

    Raises:
        ResponseFormatError: If the path is missing or is not a string.
    """
    try:
        text = envelope["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        raise ResponseFormatError(
            "Unexpected API response: missing candidates[0].content.parts[0].text"
        )
    if not isinstance(text, str):
        raise ResponseFormatError(
            f"Unexpected API response: generated text is {type(text).__name__}, not str"
        )
    return text


def describe_structure(data: Any) -> dict:
    """Summarize top-level keys and value types of a decoded response for logs."""
    if not isinstance(data, dict):
        return {"type": type(data).__name__}
    structure = {}
    for key, value in data.items():
        if isinstance(value, (list, dict)):
            structure[key] = {"type": type(value).__name__, "count": len(value)}
        else:
            structure[key] = {
                "type": type(value).__name__,
                "length": len(value) if isinstance(value, str) else None,
            }
    return structure


class GeminiClient:
    """
    Client for the Gemini generateContent endpoint.

    The API key is read once at construction. A missing key does not fail
    construction; it fails each generate() call before any network I/O.
    """

    def __init__(self, config: Optional[GeminiConfig] = None, session: Optional[requests.Session] = None):
        """
        Initialize the client.

        Args:
            config: Connection settings. If None, read from the environment.
            session: Optional requests session (connection reuse, testing).
        """
        self.config = config or GeminiConfig.from_env()
        self.api_key = self.config.api_key
        self._session = session
        logger.debug(f"GeminiClient initialized: model={self.config.model}")

    def _post(self, body: bytes) -> requests.Response:
        post = self._session.post if self._session is not None else requests.post
        return post(
            self.config.endpoint,
            params={"key": self.api_key},
            data=body,
            headers={"Content-Type": "application/json; charset=utf-8"},
            timeout=self.config.timeout,
            verify=True,
        )

    def generate(self, request: GenerationRequest) -> GenerationResponse:
        """
        Run one generation call and return the schema-shaped output.

        Args:
            request: Prompt text plus declared response schema.

        Returns:
            GenerationResponse whose fields include every required field,
            each with its declared shape.

        Raises:
            ConfigurationError: No API key configured.
            EncodingError: Payload could not be serialized.
            TransportError: Connection failure or HTTP status other than 200.
            ResponseFormatError: Envelope or generated JSON is malformed,
                or a required field is missing or mis-shaped.
        """
        if not self.config.has_api_key:
            logger.error("Generation aborted: Gemini API key not configured")
            raise ConfigurationError(
                "Gemini API key not configured. Set GEMINI_API_KEY environment "
                "variable or pass api_key in GeminiConfig."
            )

        payload = sanitize_payload(build_payload(request))
        body = encode_payload(payload)

        logger.info(
            f"Sending generation request: model={self.config.model} "
            f"payload_size={len(body)} prompt_length={len(request.prompt_text)} "
            f"fields={len(request.response_schema)}"
        )

        try:
            response = self._post(body)
        except requests.RequestException as e:
            logger.error(f"Gemini request failed: {e}")
            raise TransportError(f"Gemini request failed: {e}") from e

        if response.status_code != 200:
            logger.error(
                f"Gemini API returned HTTP {response.status_code}: "
                f"body_length={len(response.text or '')}"
            )
            raise TransportError(
                f"API returned HTTP {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        raw = response.text or ""
        try:
            envelope = json.loads(raw)
        except ValueError as e:
            logger.error(f"Failed to decode API response: {e} (body_length={len(raw)})")
            raise ResponseFormatError(f"Failed to decode API response: {e}") from e

        if not isinstance(envelope, dict):
            logger.error(f"API response is not an object: {describe_structure(envelope)}")
            raise ResponseFormatError("API response is not a JSON object")

        try:
            generated = extract_generated_text(envelope)
        except ResponseFormatError:
            logger.error(
                f"Unexpected response structure: {describe_structure(envelope)} "
                f"(expected candidates[0].content.parts[0].text)"
            )
            raise

        fields = self._decode_generated(generated, request)

        logger.info(
            f"Generation succeeded: response_size={len(raw)} "
            f"generated_length={len(generated)} fields={len(fields)}"
        )
        return GenerationResponse(fields=fields, response_size=len(raw))

    def _decode_generated(self, generated: str, request: GenerationRequest) -> dict[str, Any]:
        """Decode the model's JSON text and check it against the request schema."""
        try:
            fields = json.loads(generated)
        except ValueError as e:
            logger.error(
                f"Failed to decode generated JSON: {e} (generated_length={len(generated)})"
            )
            raise ResponseFormatError(f"Failed to decode generated JSON: {e}") from e

        if not isinstance(fields, dict):
            logger.error(f"Generated JSON is {type(fields).__name__}, expected object")
            raise ResponseFormatError("Generated JSON is not an object")

        missing = [name for name in request.ordered_required if name not in fields]
        if missing:
            logger.error(
                f"Generated JSON missing required fields: missing={missing} "
                f"present={sorted(fields)}"
            )
            raise ResponseFormatError(f"Response missing required fields: {', '.join(missing)}")

        for name, field_type in request.response_schema.items():
            if name in fields and not field_type.matches(fields[name]):
                logger.error(
                    f"Generated field '{name}' has wrong shape: "
                    f"expected {field_type.value}, got {type(fields[name]).__name__}"
                )
                raise ResponseFormatError(
                    f"Field '{name}' has wrong shape: expected {field_type.value}"
                )

        return fields


def create_gemini_client(
    api_key: Optional[str] = None,
    model: Optional[str] = None,
) -> GeminiClient:
    """
    Factory function to create a Gemini client.

    Args:
        api_key: Optional API key. If None, uses the GEMINI_API_KEY env var.
        model: Optional model override.

    Returns:
        Configured GeminiClient instance.
    """
    overrides = {}
    if api_key:
        overrides["api_key"] = api_key
    if model:
        overrides["model"] = model
    return GeminiClient(GeminiConfig.from_env(**overrides))
