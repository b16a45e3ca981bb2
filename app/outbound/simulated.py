import asyncio
import logging
import secrets
import string
from typing import Any

from app.models.steps import PhoneCallConfig, SiteGenerateConfig
from app.time_utils import utc_now_iso

logger = logging.getLogger(__name__)

DEFAULT_CALL_MESSAGE = "Automated call from Zen API Automator"
DEFAULT_SITE_DOMAIN = "generated-site.com"
DEFAULT_SITE_TEMPLATE = "modern"

_CALL_ID_ALPHABET = string.ascii_lowercase + string.digits


def analyze_phone_call(config: PhoneCallConfig) -> dict[str, Any]:
    return {
        "simulated": True,
        "message": "Phone call analysis simulated",
        "phoneNumber": config.phone_number,
        "analysis": "Call quality: Good, Duration: 5:23",
    }


def generate_site(config: SiteGenerateConfig) -> dict[str, Any]:
    return {
        "simulated": True,
        "message": "Website generation simulated",
        "url": f"https://{config.domain or DEFAULT_SITE_DOMAIN}",
        "template": config.template or DEFAULT_SITE_TEMPLATE,
    }


async def place_phone_call(
    to: str,
    from_number: str,
    message: str | None = None,
    *,
    delay_seconds: float = 0.0,
) -> dict[str, Any]:
    """Pretend to dial ``to``; no telephony provider is contacted."""
    if delay_seconds > 0:
        await asyncio.sleep(delay_seconds)

    call_id = "call_" + "".join(secrets.choice(_CALL_ID_ALPHABET) for _ in range(9))
    logger.info("simulated phone call %s to=%s from=%s", call_id, to, from_number)
    return {
        "call_id": call_id,
        "to": to,
        "from": from_number,
        "message": message or DEFAULT_CALL_MESSAGE,
        "status": "initiated",
        "simulated": True,
        "timestamp": utc_now_iso(),
    }
