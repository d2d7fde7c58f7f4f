"""
Byte decoding for statement exports without a declared encoding.
Card issuers export either Shift-JIS (cp932) or UTF-8; the decoding
producing fewer replacement characters wins.
"""
from core.logger import setup_logger

logger = setup_logger(__name__)

LEGACY_ENCODING = "cp932"
REPLACEMENT_CHAR = "\ufffd"


def decode(raw: bytes) -> str:
    """
    Decode raw bytes as cp932 or UTF-8, whichever looks less broken.
    
    Ties go to cp932. Never raises: undecodable bytes become U+FFFD.
    
    Args:
        raw: File contents
    
    Returns:
        Decoded text
    """
    legacy_text = raw.decode(LEGACY_ENCODING, errors="replace")
    # utf-8-sig drops a leading BOM the way browser decoders do
    utf8_text = raw.decode("utf-8-sig", errors="replace")
    
    legacy_bad = legacy_text.count(REPLACEMENT_CHAR)
    utf8_bad = utf8_text.count(REPLACEMENT_CHAR)
    
    if legacy_bad <= utf8_bad:
        logger.debug(f"Decoded {len(raw)} bytes as {LEGACY_ENCODING} ({legacy_bad} vs {utf8_bad} invalid)")
        return legacy_text
    
    logger.debug(f"Decoded {len(raw)} bytes as utf-8 ({utf8_bad} vs {legacy_bad} invalid)")
    return utf8_text
