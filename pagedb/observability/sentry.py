# File: pagedb/observability/sentry.py | Version: 1.0 | Title: Optional Sentry initialization
import logging

from pagedb.core.config import settings

log = logging.getLogger(__name__)


def init_sentry_if_configured() -> bool:
    dsn = settings.SENTRY_DSN.strip()
    if not dsn:
        log.info("Sentry disabled (no SENTRY_DSN).")
        return False

    import sentry_sdk

    traces = settings.SENTRY_TRACES_SAMPLE_RATE
    sentry_sdk.init(dsn=dsn, traces_sample_rate=traces)
    log.info("Sentry initialized (traces_sample_rate=%s).", traces)
    return True
