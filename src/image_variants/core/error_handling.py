# src/image_variants/core/error_handling.py

import functools
import logging

from botocore.exceptions import BotoCoreError, ClientError as BotocoreClientError
from PIL import UnidentifiedImageError as PILUnidentifiedImageError

from .exceptions import DecodeError, NotFoundError, StoreWriteError

NOT_FOUND_ERROR_CODES = ('NoSuchKey', '404', 'NotFound', 'ResourceNotFoundException')


def _error_code(exc):
    if isinstance(exc, BotocoreClientError):
        return str(exc.response.get('Error', {}).get('Code', ''))
    return ''


def translate_store_errors(operation='read'):
    """
    Decorator translating botocore failures into pipeline exceptions.

    Reads map missing keys to NotFoundError; other botocore read failures
    propagate unchanged. Every failure of a write becomes StoreWriteError.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = logging.getLogger(func.__module__ + '.' + func.__name__)
            try:
                return func(*args, **kwargs)
            except (NotFoundError, StoreWriteError):
                raise
            except (BotocoreClientError, BotoCoreError) as e:
                code = _error_code(e)
                if operation == 'read' and code in NOT_FOUND_ERROR_CODES:
                    logger.debug(f"Store lookup in '{func.__name__}' found nothing: {e}")
                    raise NotFoundError(f"{func.__name__}: object not found ({code})") from e
                if operation == 'write':
                    logger.error(f"Store write '{func.__name__}' failed: {e}", exc_info=True)
                    raise StoreWriteError(f"{func.__name__} failed: {e}") from e
                logger.error(f"Store read '{func.__name__}' failed: {e}", exc_info=True)
                raise
        return wrapper
    return decorator


def translate_decode_errors(func):
    """
    Decorator turning Pillow decoding failures into DecodeError.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DecodeError:
            raise
        except PILUnidentifiedImageError as e:
            raise DecodeError(f"Failed to identify image in {func.__name__}: {e}") from e
        except (OSError, SyntaxError, ValueError) as e:
            raise DecodeError(f"Failed to decode image in {func.__name__}: {e}") from e
    return wrapper
