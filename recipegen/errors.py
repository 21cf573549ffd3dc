"""
Error taxonomy for generation calls.

Every failure of a remote generation call is surfaced to callers as one of:

- CredentialError: the API key is missing, invalid, or lacks permission.
  The UI reacts by re-opening the credential gate.
- GenerationError: any other transport or parse failure. The UI shows a
  generic, localized "generation failed" message.

Raw SDK or HTTP exceptions never leave a client; they are converted with
classify_exception().
"""

from typing import Optional

ERROR_KIND_CREDENTIAL = "credential"
ERROR_KIND_GENERATION = "generation"

# User-facing messages (Arabic, matching the UI copy)
GENERATION_FAILED_MESSAGE = "فشل إنشاء الوصفات. يرجى المحاولة مرة أخرى."
VARIATIONS_FAILED_MESSAGE = "فشل في اقتراح تنويعات."
TRANSCRIPTION_FAILED_MESSAGE = "تعذر التعرف على الصوت. يرجى المحاولة مرة أخرى."
CREDENTIAL_MESSAGE = "مفتاح API غير صالح أو مفقود. يرجى تحديد مفتاح صالح للمتابعة."
CREDENTIAL_CONFIG_MESSAGE = "مفتاح API غير صالح أو مفقود. يرجى التحقق من إعدادات النشر (GEMINI_API_KEY)."
IMAGE_MISSING_MESSAGE = "لم يتم العثور على بيانات الصورة في استجابة Imagen."

# Substrings (lowercase) that identify credential problems in error text
CREDENTIAL_MARKERS = (
    "api key not valid",
    "api_key_invalid",
    "invalid api key",
    "api key expired",
    "missing api key",
    "api key not found",
    "permission denied",
    "permission_denied",
    "unauthenticated",
    "requested entity was not found",
)

CREDENTIAL_STATUS_CODES = (401, 403)


class GenerationError(Exception):
    """
    Base error for a failed generation call.

    Attributes:
        message: Localized, user-facing message
        kind: Error category (ERROR_KIND_GENERATION or ERROR_KIND_CREDENTIAL)
    """
    kind = ERROR_KIND_GENERATION

    def __init__(self, message: str = GENERATION_FAILED_MESSAGE) -> None:
        super().__init__(message)
        self.message = message


class CredentialError(GenerationError):
    """Raised when the API credential is missing, invalid, or not permitted."""
    kind = ERROR_KIND_CREDENTIAL

    def __init__(self, message: str = CREDENTIAL_MESSAGE) -> None:
        super().__init__(message)


class RecipeParseError(GenerationError):
    """Raised when the model's response cannot be turned into a recipe list."""


def is_credential_error(exc: BaseException) -> bool:
    """
    Decide whether an exception signals a credential problem.

    Checks the HTTP-like status code the google-genai SDK attaches to its
    errors (``code``) and, failing that, the error text.

    Examples:
        >>> is_credential_error(Exception("400 API key not valid. Please pass a valid API key."))
        True
        >>> is_credential_error(Exception("503 UNAVAILABLE"))
        False
    """
    if isinstance(exc, CredentialError):
        return True
    code = getattr(exc, "code", None) or getattr(exc, "status_code", None)
    if code in CREDENTIAL_STATUS_CODES:
        return True
    text = str(exc).lower()
    return any(marker in text for marker in CREDENTIAL_MARKERS)


def classify_exception(
    exc: BaseException,
    message: str = GENERATION_FAILED_MESSAGE,
    credential_message: Optional[str] = None,
) -> GenerationError:
    """
    Convert any exception into a GenerationError or CredentialError.

    Already-classified errors are returned unchanged.

    Args:
        exc: The exception raised by the transport or parser
        message: Message to use for generic failures
        credential_message: Message to use for credential failures (optional)

    Returns:
        A GenerationError instance (CredentialError for credential problems)
    """
    if isinstance(exc, GenerationError):
        return exc
    if is_credential_error(exc):
        return CredentialError(credential_message or CREDENTIAL_MESSAGE)
    return GenerationError(message)
