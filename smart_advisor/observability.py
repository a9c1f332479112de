"""
Optional AWS X-Ray tracing.

PURPOSE:
- Enables X-Ray when USE_XRAY=1 and the aws-xray-sdk extra is installed.
- Gives the service a subsegment around the Bedrock call so slow completions
  show up next to the request in the trace map.

CONTEXT:
- Tracing must never change request behaviour; every entry point here degrades
  to a no-op when X-Ray is off or not importable.
"""
from __future__ import annotations
import os

import structlog

log = structlog.get_logger(__name__)


def init_observability():
    """
    Optionally initialise AWS X-Ray instrumentation.

    returns:
    - xray_recorder if configured, otherwise None.

    notes:
    - patch_all() instruments boto3 and requests, which covers both the Bedrock
      client and the UI's HTTP client.
    """
    if os.getenv("USE_XRAY", "0") != "1":
        return None
    try:
        from aws_xray_sdk.core import xray_recorder, patch_all
    except ImportError:
        log.warning("observability.xray_unavailable")
        return None
    xray_recorder.configure(service=os.getenv("XRAY_SERVICE_NAME", "SmartAdvisor"))
    patch_all()
    return xray_recorder


class xray_segment:
    """
    Context manager for a manual X-Ray subsegment.

    usage:
    >>> with xray_segment("bedrock.converse"):
    >>>     text = client.complete(prompt)

    Exceptions raised inside the block propagate untouched; only tracing
    failures are suppressed.
    """

    def __init__(self, name: str):
        self.name = name
        self.sub = None

    def __enter__(self):
        if os.getenv("USE_XRAY", "0") != "1":
            return self
        try:
            from aws_xray_sdk.core import xray_recorder
            self.sub = xray_recorder.begin_subsegment(self.name)
        except Exception as e:
            log.debug("observability.subsegment_failed", name=self.name, error=str(e))
            self.sub = None
        return self

    def __exit__(self, exc_type, exc, tb):
        if self.sub is None:
            return False
        try:
            from aws_xray_sdk.core import xray_recorder
            if exc is not None:
                self.sub.add_exception(exc, [])
            xray_recorder.end_subsegment()
        except Exception as e:
            log.debug("observability.subsegment_close_failed", name=self.name, error=str(e))
        return False
